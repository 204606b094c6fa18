from __future__ import annotations

from typing import List, Protocol

from ..models import Product, Subscription


class ProductRepository(Protocol):
    """Read access to the product catalog."""

    def get_product(self, product_id: str) -> List[Product]:
        """Return the matching product, or every product when ``product_id`` is empty.

        Raises ``MalformedIdentifierError`` for identifiers the store cannot parse.
        """
        ...


class SubscriptionRepository(Protocol):
    """Storage for user subscriptions."""

    def get_subscription_by_id(self, subscription_id: str) -> Subscription:
        """Raises ``MalformedIdentifierError`` or ``RecordNotFoundError``."""
        ...

    def save_subscription(self, subscription: Subscription) -> Subscription:
        """Create or replace a subscription, assigning an id when it has none."""
        ...


class PersistenceGateway(ProductRepository, SubscriptionRepository, Protocol):
    """Composite gateway combining every persistence concern used by the app."""

    def close(self) -> None:
        ...
