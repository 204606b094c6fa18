"""Loading of catalog entries from a JSON document."""

import json
import logging
from pathlib import Path
from typing import List

from ...domain.models import Product

logger = logging.getLogger(__name__)


def load_products(path: Path) -> List[Product]:
    """Read products from a JSON file.

    The file holds either a list of product objects or ``{"products": [...]}``.
    Each object needs ``id``, ``name``, ``subscription_period``, ``price`` and
    ``tax_percentage``.
    """
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    items = payload.get("products", []) if isinstance(payload, dict) else payload

    products: List[Product] = []
    for item in items:
        try:
            period = int(item["subscription_period"])
            if period <= 0:
                raise ValueError("subscription_period must be positive")
            tax_percentage = float(item["tax_percentage"])
            if not 0 <= tax_percentage <= 100:
                raise ValueError("tax_percentage must be between 0 and 100")
            products.append(
                Product(
                    id=str(item["id"]),
                    name=str(item["name"]),
                    subscription_period=period,
                    price=float(item["price"]),
                    tax_percentage=tax_percentage,
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid product entry {item!r} in {path}: {exc}") from exc
    logger.info("Loaded %d products from %s", len(products), path)
    return products
