"""
Catalog Loader

Loads the stall's static catalog (products, pricing rules, combo table,
modifiers) from a JSON file. The catalog is read once at startup and is
immutable for the session.

Usage:
    from utils.catalog_loader import load_catalog

    catalog = load_catalog()  # config.CATALOG_PATH
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

import config
from enums.combo_component import ComboComponent
from exceptions.product import InvalidProductException
from models.product import CatalogDTO

logger = logging.getLogger(__name__)


def load_catalog(path: str | Path | None = None) -> CatalogDTO:
    """
    Load and validate the catalog JSON file.

    Args:
        path: Catalog file, defaults to config.CATALOG_PATH

    Returns:
        CatalogDTO: Validated catalog

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        pydantic.ValidationError: If a record has the wrong shape
        InvalidProductException: If a product cannot be sold
    """
    catalog_path = Path(path or config.CATALOG_PATH)

    if not catalog_path.exists():
        raise FileNotFoundError(
            f"Catalog file not found: {catalog_path}\n"
            f"Set CATALOG_PATH or create catalog/products.json"
        )

    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"❌ Failed to parse {catalog_path}: {e}")
        raise

    try:
        catalog = CatalogDTO.model_validate(raw)
    except ValidationError as e:
        logger.error(f"❌ Catalog {catalog_path} failed validation: {e.error_count()} error(s)")
        raise

    validate_catalog(catalog)
    logger.info(f"✅ Loaded {len(catalog.products)} products from {catalog_path.name}")
    return catalog


def validate_catalog(catalog: CatalogDTO) -> None:
    """
    Enforce catalog invariants pydantic cannot express on its own.

    - A product without fixed prices must be sellable by weight (price > 0)
    - Product ids are unique
    - Every combo component maps to an existing, weighable product
    - The combo placeholder exists

    Raises:
        InvalidProductException: On the first violation found
    """
    seen: set[str] = set()
    for product in catalog.products:
        if product.id in seen:
            raise InvalidProductException(product.id, "duplicate product id")
        seen.add(product.id)
        if not product.has_fixed_prices and not product.is_weighable:
            raise InvalidProductException(
                product.id, "no fixed prices and default selling price is not positive"
            )

    if catalog.combo.placeholder_product_id not in seen:
        raise InvalidProductException(catalog.combo.placeholder_product_id, "combo placeholder missing from catalog")

    products = {p.id: p for p in catalog.products}
    for key, product_id in catalog.combo.components.items():
        try:
            ComboComponent.from_string(key)
        except ValueError as e:
            raise InvalidProductException(product_id, str(e)) from e
        product = products.get(product_id)
        if product is None:
            raise InvalidProductException(product_id, f"combo component '{key}' maps to an unknown product")
        if not product.is_weighable:
            raise InvalidProductException(product_id, f"combo component '{key}' has no selling price per unit")
