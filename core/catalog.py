"""
Catalog flattening for catalog search.

Turns the nested category → subcategory → product tree delivered by the
catalog fetch into one immutable Catalog snapshot of three flat,
cross-referenced lists. Child rows carry denormalized parent ids and names
so the matcher and view builder never walk the tree.

Malformed entries are dropped rather than failing the whole catalog:
one corrupt product must not block search over everything else.
"""

import uuid
from typing import Any, Optional

from core.context import Catalog, Category, Image, Product, Subcategory
from core.structured_logging import get_logger, timed

# Module-level logger
_logger = get_logger("core.catalog")

# Keys a wrapped payload may keep the category list under
TREE_WRAPPER_KEYS = ("categories", "results", "data")


def coerce_id(value: Any) -> Optional[str]:
    """
    Coerce a catalog id to a stable string key.

    Numbers and strings are both accepted upstream ("7" and 7 are the same id).
    Integral floats lose their ".0". Booleans, blanks and containers are rejected.

    Returns:
        String id, or None if the value can't serve as an id
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if value != value:  # NaN
            return None
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    return None


def coerce_name(value: Any) -> Optional[str]:
    """Entity name as a non-blank string, or None."""
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return None
    text = str(value).strip()
    return text or None


def coerce_images(value: Any) -> tuple[Image, ...]:
    """
    Parse an images array.

    Non-list values become an empty tuple. Entries that aren't usable image
    objects are kept as empty images so "first image" still means the first
    entry the catalog listed (it falls back to the placeholder when rendered).
    """
    if not isinstance(value, list):
        return ()

    images = []
    for entry in value:
        if isinstance(entry, dict):
            url = entry.get("url")
            alt = entry.get("alt_text")
            images.append(Image(
                url=url if isinstance(url, str) else "",
                alt_text=alt if isinstance(alt, str) else None,
            ))
        elif isinstance(entry, str):
            images.append(Image(url=entry))
        else:
            images.append(Image())
    return tuple(images)


def _slug(entry: dict, entity_id: str) -> str:
    url = entry.get("url")
    if isinstance(url, str) and url.strip():
        return url.strip()
    return entity_id


def _child_list(entry: dict, key: str) -> list:
    value = entry.get(key)
    return value if isinstance(value, list) else []


def unwrap_tree(tree: Any) -> list:
    """
    Get the category list out of a catalog payload.

    Accepts the bare list or a dict wrapping it under one of
    TREE_WRAPPER_KEYS. Anything else is treated as an empty catalog.
    """
    if isinstance(tree, list):
        return tree
    if isinstance(tree, dict):
        for key in TREE_WRAPPER_KEYS:
            if isinstance(tree.get(key), list):
                return tree[key]
    return []


@timed("catalog_flatten")
def flatten_catalog(tree: Any, snapshot_id: Optional[str] = None) -> Catalog:
    """
    Flatten a nested catalog tree into a Catalog snapshot.

    Args:
        tree: List of category dicts (or a dict wrapping one), each with
              optional `subcategories`, each with optional `products`
        snapshot_id: Identifier for this pass (generated if None)

    Returns:
        Immutable Catalog; malformed entries are skipped

    Example:
        >>> catalog = flatten_catalog([
        ...     {"id": 1, "name": "Mugs", "subcategories": [
        ...         {"id": 10, "name": "Coffee Mugs", "products": [
        ...             {"id": 100, "name": "Red Mug"}]}]}])
        >>> catalog.products[0].cat_name
        'Mugs'
    """
    snapshot_id = snapshot_id or uuid.uuid4().hex[:12]

    categories: list[Category] = []
    subcategories: list[Subcategory] = []
    products: list[Product] = []
    dropped = 0

    for raw_cat in unwrap_tree(tree):
        if not isinstance(raw_cat, dict):
            dropped += 1
            continue
        cat_id = coerce_id(raw_cat.get("id"))
        cat_name = coerce_name(raw_cat.get("name"))
        if cat_id is None or cat_name is None:
            dropped += 1
            _logger.debug(
                "Dropping malformed category",
                extra={"event": "catalog_entry_dropped", "context": "category"}
            )
            continue

        cat_url = _slug(raw_cat, cat_id)
        categories.append(Category(
            id=cat_id,
            name=cat_name,
            url=cat_url,
            images=coerce_images(raw_cat.get("images")),
        ))

        for raw_sub in _child_list(raw_cat, "subcategories"):
            if not isinstance(raw_sub, dict):
                dropped += 1
                continue
            sub_id = coerce_id(raw_sub.get("id"))
            sub_name = coerce_name(raw_sub.get("name"))
            if sub_id is None or sub_name is None:
                dropped += 1
                _logger.debug(
                    "Dropping malformed subcategory",
                    extra={"event": "catalog_entry_dropped", "context": "subcategory"}
                )
                continue

            sub_url = _slug(raw_sub, sub_id)
            subcategories.append(Subcategory(
                id=sub_id,
                name=sub_name,
                url=sub_url,
                cat_id=cat_id,
                cat_name=cat_name,
                cat_url=cat_url,
                images=coerce_images(raw_sub.get("images")),
            ))

            for raw_prod in _child_list(raw_sub, "products"):
                if not isinstance(raw_prod, dict):
                    dropped += 1
                    continue
                prod_id = coerce_id(raw_prod.get("id"))
                prod_name = coerce_name(raw_prod.get("name"))
                if prod_id is None or prod_name is None:
                    dropped += 1
                    _logger.debug(
                        "Dropping malformed product",
                        extra={"event": "catalog_entry_dropped", "context": "product"}
                    )
                    continue

                products.append(Product(
                    id=prod_id,
                    name=prod_name,
                    url=_slug(raw_prod, prod_id),
                    cat_id=cat_id,
                    cat_name=cat_name,
                    cat_url=cat_url,
                    sub_id=sub_id,
                    sub_name=sub_name,
                    sub_url=sub_url,
                    images=coerce_images(raw_prod.get("images")),
                ))

    _logger.info(
        f"Catalog flattened: {len(categories)} categories, "
        f"{len(subcategories)} subcategories, {len(products)} products",
        extra={
            "event": "catalog_flattened",
            "snapshot_id": snapshot_id,
            "categories": len(categories),
            "subcategories": len(subcategories),
            "products": len(products),
            "dropped": dropped,
        }
    )

    return Catalog(
        categories=tuple(categories),
        subcategories=tuple(subcategories),
        products=tuple(products),
        snapshot_id=snapshot_id,
    )
