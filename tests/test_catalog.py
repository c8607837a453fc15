"""
Tests for catalog flattening.

Run with: pytest tests/test_catalog.py -v
"""

import math

import pytest

from core.catalog import coerce_id, coerce_images, coerce_name, flatten_catalog, unwrap_tree
from core.context import Catalog, Image


class TestCoercion:
    """Id, name and image parsing."""

    @pytest.mark.parametrize("value,expected", [
        (7, "7"),
        ("7", "7"),
        (" 7 ", "7"),
        (7.0, "7"),
        (7.5, "7.5"),
        ("abc-1", "abc-1"),
    ])
    def test_coerce_id(self, value, expected):
        assert coerce_id(value) == expected

    @pytest.mark.parametrize("value", [None, True, False, "", "   ", math.nan, {"id": 1}, [1]])
    def test_coerce_id_rejects(self, value):
        assert coerce_id(value) is None

    def test_coerce_name(self):
        assert coerce_name("  Mugs ") == "Mugs"
        assert coerce_name(12) == "12"
        assert coerce_name("") is None
        assert coerce_name(None) is None
        assert coerce_name({"en": "Mugs"}) is None

    def test_coerce_images(self):
        images = coerce_images([
            {"url": "https://x/a.png", "alt_text": "A"},
            "media/b.png",
            42,
            {"url": 5},
        ])
        assert images == (
            Image(url="https://x/a.png", alt_text="A"),
            Image(url="media/b.png"),
            Image(),
            Image(),
        )

    @pytest.mark.parametrize("value", [None, "a.png", {"url": "a.png"}])
    def test_coerce_images_non_list(self, value):
        assert coerce_images(value) == ()


class TestUnwrapTree:
    """Payload shapes."""

    def test_bare_list(self):
        tree = [{"id": 1}]
        assert unwrap_tree(tree) is tree

    @pytest.mark.parametrize("key", ["categories", "results", "data"])
    def test_wrapped(self, key):
        assert unwrap_tree({key: [{"id": 1}]}) == [{"id": 1}]

    @pytest.mark.parametrize("payload", [None, "oops", 5, {"items": []}])
    def test_unusable(self, payload):
        assert unwrap_tree(payload) == []


class TestFlattenCatalog:
    """Nested tree → flat snapshot."""

    def test_counts(self, store_catalog):
        assert len(store_catalog.categories) == 2
        assert len(store_catalog.subcategories) == 4
        assert len(store_catalog.products) == 5

    def test_catalog_order(self, store_catalog):
        assert [p.name for p in store_catalog.products] == [
            "Red Mug", "Blue Mug", "Steel Travel Mug", "Red Shirt", "White Tee",
        ]

    def test_ids_are_strings(self, store_catalog):
        assert store_catalog.categories[0].id == "1"
        assert store_catalog.subcategories[0].id == "10"
        assert store_catalog.products[0].id == "100"

    def test_parent_fields_denormalized(self, store_catalog):
        steel = store_catalog.products[2]
        assert (steel.cat_id, steel.cat_name, steel.cat_url) == ("1", "Mugs", "mugs")
        assert (steel.sub_id, steel.sub_name, steel.sub_url) == ("11", "Travel Mugs", "travel-mugs")

        plain = store_catalog.subcategories[3]
        assert (plain.cat_id, plain.cat_name, plain.cat_url) == ("2", "T-Shirts", "t-shirts")

    def test_parents_resolve(self, store_catalog):
        cat_ids = {c.id for c in store_catalog.categories}
        sub_ids = {s.id for s in store_catalog.subcategories}
        assert all(s.cat_id in cat_ids for s in store_catalog.subcategories)
        assert all(p.sub_id in sub_ids and p.cat_id in cat_ids for p in store_catalog.products)

    def test_url_falls_back_to_id(self, store_catalog):
        blue = store_catalog.products[1]
        assert blue.url == "101"

    def test_images_parsed(self, store_catalog):
        assert store_catalog.categories[0].images == (Image(url="media/mugs.png", alt_text="Mugs"),)
        assert store_catalog.products[2].images == (Image(url="uploads/steel.jpg"),)
        assert store_catalog.products[1].images == ()

    def test_snapshot_id(self, store_tree):
        assert flatten_catalog(store_tree, snapshot_id="abc").snapshot_id == "abc"
        first = flatten_catalog(store_tree)
        second = flatten_catalog(store_tree)
        assert first.snapshot_id and second.snapshot_id
        assert first.snapshot_id != second.snapshot_id

    def test_wrapped_payload(self, store_tree):
        catalog = flatten_catalog({"categories": store_tree})
        assert len(catalog.products) == 5

    @pytest.mark.parametrize("tree", [None, [], {}, "not a tree"])
    def test_empty(self, tree):
        catalog = flatten_catalog(tree)
        assert isinstance(catalog, Catalog)
        assert catalog.is_empty()

    def test_multi_linkage_kept_per_subcategory(self):
        tree = [{
            "id": 1, "name": "Mugs",
            "subcategories": [
                {"id": 10, "name": "Coffee Mugs", "products": [{"id": 100, "name": "Red Mug"}]},
                {"id": 11, "name": "Gift Mugs", "products": [{"id": 100, "name": "Red Mug"}]},
            ],
        }]
        catalog = flatten_catalog(tree)
        assert [(p.id, p.sub_id) for p in catalog.products] == [("100", "10"), ("100", "11")]


class TestMalformedEntries:
    """Bad entries are dropped, the rest survives."""

    def test_drops_without_failing(self):
        tree = [
            "junk",
            {"name": "No Id"},
            {"id": 3, "name": ""},
            {
                "id": 1,
                "name": "Mugs",
                "subcategories": [
                    None,
                    {"id": 10},
                    {
                        "id": 11,
                        "name": "Coffee Mugs",
                        "products": [
                            {"id": 100, "name": "Red Mug"},
                            {"id": None, "name": "Ghost"},
                            {"id": True, "name": "Flag"},
                            {"id": 101},
                            7,
                        ],
                    },
                ],
            },
        ]
        catalog = flatten_catalog(tree)
        assert [c.name for c in catalog.categories] == ["Mugs"]
        assert [s.name for s in catalog.subcategories] == ["Coffee Mugs"]
        assert [p.name for p in catalog.products] == ["Red Mug"]

    def test_non_list_children(self):
        tree = [{"id": 1, "name": "Mugs", "subcategories": {"id": 10}}]
        catalog = flatten_catalog(tree)
        assert len(catalog.categories) == 1
        assert catalog.subcategories == ()

    def test_missing_children(self):
        catalog = flatten_catalog([{"id": 1, "name": "Mugs"}])
        assert catalog.categories[0].name == "Mugs"
        assert catalog.products == ()


class TestCatalogQueries:
    """Lookup helpers on the snapshot."""

    def test_subcategories_of(self, store_catalog):
        assert [s.name for s in store_catalog.subcategories_of("1")] == ["Coffee Mugs", "Travel Mugs"]

    def test_products_in_category(self, store_catalog):
        assert [p.id for p in store_catalog.products_in_category("2")] == ["200", "201"]

    def test_products_in_subcategory(self, store_catalog):
        assert [p.id for p in store_catalog.products_in_subcategory("10")] == ["100", "101"]

    def test_quick_badges(self, store_catalog):
        assert store_catalog.quick_badges() == ["Mugs", "T-Shirts"]
