"""
Catalog loader for catalog search.

Builds the nested category → subcategory → product tree from local files
so hosts and tests don't need the storefront API:

- JSON: the same payload the nav-items endpoint returns
- Excel/CSV: one row per product, flattened by the storefront's export

Architecture: read → build the raw tree → hand it to core.catalog.flatten_catalog.
The loader never scores or filters; malformed rows are skipped and counted.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from core.catalog import flatten_catalog, unwrap_tree
from core.context import Catalog
from core.structured_logging import get_logger

# Module logger
_logger = get_logger("catalog_loader")


class CatalogLoadError(Exception):
    """Raised when a catalog file can't be read at all."""


# =============================================================================
# COLUMN NORMALIZATION MAPPINGS
# =============================================================================
# Maps spreadsheet headers (lower-cased, spaces/hyphens → underscores)
# to tree fields. Only the three name columns are required.

COLUMN_ALIASES = {
    # Names
    'category': 'category',
    'category_name': 'category',
    'subcategory': 'subcategory',
    'sub_category': 'subcategory',
    'subcategory_name': 'subcategory',
    'product': 'product',
    'product_name': 'product',
    'name': 'product',

    # Ids
    'category_id': 'category_id',
    'subcategory_id': 'subcategory_id',
    'sub_category_id': 'subcategory_id',
    'product_id': 'product_id',
    'id': 'product_id',

    # Slugs
    'category_url': 'category_url',
    'subcategory_url': 'subcategory_url',
    'sub_category_url': 'subcategory_url',
    'product_url': 'product_url',
    'url': 'product_url',

    # Images
    'image_url': 'image_url',
    'image': 'image_url',
    'image_alt': 'image_alt',
    'alt_text': 'image_alt',
}

REQUIRED_COLUMNS = ('category', 'subcategory', 'product')

SPREADSHEET_SUFFIXES = ('.xlsx', '.xls', '.csv')


# =============================================================================
# PARSING HELPERS
# =============================================================================

def slugify(text: str) -> str:
    """Lower-case and hyphenate whitespace ("Coffee Mugs" -> "coffee-mugs")."""
    return re.sub(r'\s+', '-', str(text).strip().lower())


def normalize_column(name: Any) -> str:
    """Canonical header key for COLUMN_ALIASES lookup."""
    key = re.sub(r'[\s\-]+', '_', str(name).strip().lower())
    return COLUMN_ALIASES.get(key, key)


def cell(row: pd.Series, column: str) -> Optional[str]:
    """
    Read a cell as a stripped string.

    Returns None for missing columns, NaN and blank cells. Integral floats
    (pandas reads id columns with gaps as float) lose their ".0".
    """
    if column not in row.index:
        return None
    value = row[column]
    if pd.isna(value):
        return None
    if hasattr(value, 'item'):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


# =============================================================================
# LOADERS
# =============================================================================

def load_catalog_json(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load a catalog tree from a JSON file.

    Accepts the bare category list or an object wrapping it under
    "categories", "results" or "data".

    Raises:
        CatalogLoadError: File missing or not valid JSON
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e

    tree = unwrap_tree(payload)
    _logger.info(
        f"Loaded {len(tree)} categories from {path.name}",
        extra={"event": "catalog_loaded", "categories": len(tree)}
    )
    return tree


def read_spreadsheet(path: Union[str, Path], sheet_name: Union[int, str] = 0) -> pd.DataFrame:
    """
    Read an Excel or CSV export into a DataFrame with canonical headers.

    Raises:
        CatalogLoadError: File missing, unreadable, or lacking required columns
    """
    path = Path(path)
    if not path.exists():
        raise CatalogLoadError(f"File not found: {path}")

    try:
        if path.suffix.lower() == '.csv':
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(path, sheet_name=sheet_name, dtype=str, keep_default_na=False)
    except (ValueError, OSError, ImportError) as e:
        raise CatalogLoadError(f"Error reading {path}: {e}") from e

    df = df.rename(columns={col: normalize_column(col) for col in df.columns})
    # Alias collisions ("name" and "product") keep the first column
    df = df.loc[:, ~df.columns.duplicated()]

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise CatalogLoadError(f"Missing required columns in {path.name}: {', '.join(missing)}")

    return df


def tree_from_dataframe(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Build the nested catalog tree from one-row-per-product data.

    Categories and subcategories keep first-seen order. Missing ids fall back
    to slugs of the names (products: row number). A row with a category and
    subcategory but no product creates an empty subcategory.
    """
    categories: Dict[str, Dict[str, Any]] = {}
    subcategories: Dict[tuple, Dict[str, Any]] = {}
    skipped = 0

    for idx, row in df.iterrows():
        cat_name = cell(row, 'category')
        sub_name = cell(row, 'subcategory')
        if not cat_name or not sub_name:
            skipped += 1
            continue

        cat_id = cell(row, 'category_id') or slugify(cat_name)
        category = categories.get(cat_id)
        if category is None:
            category = {
                'id': cat_id,
                'name': cat_name,
                'url': cell(row, 'category_url') or slugify(cat_name),
                'images': [],
                'subcategories': [],
            }
            categories[cat_id] = category

        sub_id = cell(row, 'subcategory_id') or f"{cat_id}/{slugify(sub_name)}"
        sub_key = (cat_id, sub_id)
        subcategory = subcategories.get(sub_key)
        if subcategory is None:
            subcategory = {
                'id': sub_id,
                'name': sub_name,
                'url': cell(row, 'subcategory_url') or slugify(sub_name),
                'images': [],
                'products': [],
            }
            subcategories[sub_key] = subcategory
            category['subcategories'].append(subcategory)

        prod_name = cell(row, 'product')
        if not prod_name:
            continue

        image_url = cell(row, 'image_url')
        images = [{'url': image_url, 'alt_text': cell(row, 'image_alt')}] if image_url else []
        prod_id = cell(row, 'product_id') or str(idx + 1)
        subcategory['products'].append({
            'id': prod_id,
            'name': prod_name,
            'url': cell(row, 'product_url') or prod_id,
            'images': images,
        })

    if skipped:
        _logger.warning(
            f"Skipped {skipped} rows without category/subcategory",
            extra={"event": "catalog_rows_skipped", "dropped": skipped}
        )

    return list(categories.values())


def load_catalog_spreadsheet(
    path: Union[str, Path],
    sheet_name: Union[int, str] = 0,
) -> List[Dict[str, Any]]:
    """
    Load a catalog tree from an Excel or CSV export.

    Args:
        path: .xlsx/.xls/.csv file
        sheet_name: Excel sheet (ignored for CSV)

    Returns:
        Nested catalog tree
    """
    df = read_spreadsheet(path, sheet_name)
    tree = tree_from_dataframe(df)
    _logger.info(
        f"Loaded {len(tree)} categories from {Path(path).name} ({len(df)} rows)",
        extra={"event": "catalog_loaded", "categories": len(tree)}
    )
    return tree


def load_catalog_tree(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load a catalog tree, picking the reader by file extension.

    Raises:
        CatalogLoadError: Unsupported extension or unreadable file
    """
    suffix = Path(path).suffix.lower()
    if suffix == '.json':
        return load_catalog_json(path)
    if suffix in SPREADSHEET_SUFFIXES:
        return load_catalog_spreadsheet(path)
    raise CatalogLoadError(f"Unsupported catalog format: {suffix or '(none)'}")


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load and flatten a catalog file into a snapshot."""
    return flatten_catalog(load_catalog_tree(path))


def get_catalog_statistics(catalog: Catalog) -> dict:
    """
    Get statistics about a loaded catalog.

    Returns dict with:
    - categories / subcategories / products: Row counts
    - by_category: Product count per category name
    - with_images: Products that have at least one image
    - empty_subcategories: Subcategories without products
    """
    stats = {
        'categories': len(catalog.categories),
        'subcategories': len(catalog.subcategories),
        'products': len(catalog.products),
        'by_category': {c.name: 0 for c in catalog.categories},
        'with_images': 0,
        'empty_subcategories': 0,
    }

    populated = set()
    for product in catalog.products:
        stats['by_category'][product.cat_name] = stats['by_category'].get(product.cat_name, 0) + 1
        if product.images:
            stats['with_images'] += 1
        populated.add(product.sub_id)

    stats['empty_subcategories'] = sum(1 for s in catalog.subcategories if s.id not in populated)
    return stats
