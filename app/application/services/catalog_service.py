from __future__ import annotations

from typing import List

from ...domain.errors import ErrorKind, MalformedIdentifierError, SubscriptionError
from ...domain.models import Product
from ...domain.ports.persistence import ProductRepository


class CatalogService:
    """Resolves product identifiers against the catalog store."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def get_product(self, product_id: str) -> List[Product]:
        """Return the product for ``product_id``, or all products when it is empty.

        An empty list means the product does not exist. Malformed identifiers
        are reported as ``INVALID_ARGUMENT``; other storage errors propagate.
        """
        try:
            return self._repository.get_product(product_id)
        except MalformedIdentifierError as exc:
            raise SubscriptionError(
                ErrorKind.INVALID_ARGUMENT, f"get product failed: {exc}"
            ) from exc
