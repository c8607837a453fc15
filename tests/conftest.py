"""
Shared catalog fixtures.

STORE_TREE is a small storefront:

    Mugs
      Coffee Mugs: Red Mug, Blue Mug
      Travel Mugs: Steel Travel Mug
    T-Shirts
      Graphic Tees: Red Shirt
      Plain Tees: White Tee
"""

import copy

import pytest

from core.catalog import flatten_catalog


STORE_TREE = [
    {
        "id": 1,
        "name": "Mugs",
        "url": "mugs",
        "images": [{"url": "media/mugs.png", "alt_text": "Mugs"}],
        "subcategories": [
            {
                "id": 10,
                "name": "Coffee Mugs",
                "url": "coffee-mugs",
                "products": [
                    {
                        "id": 100,
                        "name": "Red Mug",
                        "url": "red-mug",
                        "images": [{"url": "https://cdn.example.com/red-mug.png"}],
                    },
                    {"id": 101, "name": "Blue Mug"},
                ],
            },
            {
                "id": 11,
                "name": "Travel Mugs",
                "url": "travel-mugs",
                "products": [
                    {
                        "id": 102,
                        "name": "Steel Travel Mug",
                        "url": "steel-travel-mug",
                        "images": ["uploads/steel.jpg"],
                    },
                ],
            },
        ],
    },
    {
        "id": 2,
        "name": "T-Shirts",
        "url": "t-shirts",
        "subcategories": [
            {
                "id": 20,
                "name": "Graphic Tees",
                "url": "graphic-tees",
                "products": [{"id": 200, "name": "Red Shirt", "url": "red-shirt"}],
            },
            {
                "id": 21,
                "name": "Plain Tees",
                "url": "plain-tees",
                "products": [{"id": 201, "name": "White Tee", "url": "white-tee"}],
            },
        ],
    },
]


# Nothing clears a classification bar for "lamp"; Lime and Pump score 0.5
LOOSE_TREE = [
    {
        "id": 1,
        "name": "Produce",
        "url": "produce",
        "subcategories": [
            {
                "id": 11,
                "name": "Citrus",
                "url": "citrus",
                "products": [
                    {"id": 100, "name": "Lime", "url": "lime"},
                    {"id": 101, "name": "Pear", "url": "pear"},
                ],
            },
        ],
    },
    {
        "id": 2,
        "name": "Garden",
        "url": "garden",
        "subcategories": [
            {
                "id": 21,
                "name": "Tools",
                "url": "tools",
                "products": [{"id": 200, "name": "Pump", "url": "pump"}],
            },
        ],
    },
]


def bulk_tree(count=45):
    """One category with `count` products in a single subcategory."""
    return [{
        "id": "bulk",
        "name": "Bulk",
        "url": "bulk",
        "subcategories": [{
            "id": "items",
            "name": "Items",
            "url": "items",
            "products": [
                {"id": i, "name": f"Widget {i}", "url": f"widget-{i}"}
                for i in range(1, count + 1)
            ],
        }],
    }]


@pytest.fixture
def store_tree():
    """Fresh copy of the storefront tree (safe to mutate)."""
    return copy.deepcopy(STORE_TREE)


@pytest.fixture
def store_catalog():
    return flatten_catalog(copy.deepcopy(STORE_TREE), snapshot_id="store")


@pytest.fixture
def loose_tree():
    return copy.deepcopy(LOOSE_TREE)


@pytest.fixture
def loose_catalog():
    return flatten_catalog(copy.deepcopy(LOOSE_TREE), snapshot_id="loose")


@pytest.fixture
def bulk_catalog():
    return flatten_catalog(bulk_tree(), snapshot_id="bulk")
