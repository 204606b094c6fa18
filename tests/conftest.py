import dataclasses
import secrets
from datetime import datetime, timezone
from typing import Dict, List

import pytest

from app.application.services.catalog_service import CatalogService
from app.application.services.subscription_service import SubscriptionService
from app.domain.errors import MalformedIdentifierError, RecordNotFoundError
from app.domain.models import Product, Subscription

MONTHLY_ID = "6283a6d3b2d6f5b7a1c0e101"
YEARLY_ID = "6283a6d3b2d6f5b7a1c0e112"


def _is_identifier(value: str) -> bool:
    return len(value) == 24 and all(char in "0123456789abcdef" for char in value)


class InMemoryPersistence:
    """Dictionary-backed stand-in for the SQLite gateway."""

    def __init__(self, products: List[Product]) -> None:
        self.products = {product.id: product for product in products}
        self.subscriptions: Dict[str, Subscription] = {}
        self.saves = 0

    def get_product(self, product_id: str) -> List[Product]:
        if not product_id:
            return list(self.products.values())
        if not _is_identifier(product_id):
            raise MalformedIdentifierError(f"id {product_id!r}")
        product = self.products.get(product_id)
        return [product] if product else []

    def get_subscription_by_id(self, subscription_id: str) -> Subscription:
        if not _is_identifier(subscription_id):
            raise MalformedIdentifierError(f"id {subscription_id!r}")
        try:
            return dataclasses.replace(self.subscriptions[subscription_id])
        except KeyError:
            raise RecordNotFoundError(f"subscription {subscription_id} not found") from None

    def save_subscription(self, subscription: Subscription) -> Subscription:
        if subscription.id is None:
            subscription.id = secrets.token_hex(12)
        elif not _is_identifier(subscription.id):
            raise MalformedIdentifierError(f"id {subscription.id!r}")
        self.subscriptions[subscription.id] = dataclasses.replace(subscription)
        self.saves += 1
        return subscription

    def close(self) -> None:
        pass


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def products() -> List[Product]:
    return [
        Product(id=MONTHLY_ID, name="Monthly", subscription_period=1, price=10.0, tax_percentage=10.0),
        Product(id=YEARLY_ID, name="Yearly", subscription_period=12, price=90.0, tax_percentage=19.0),
    ]


@pytest.fixture
def persistence(products) -> InMemoryPersistence:
    return InMemoryPersistence(products)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def catalog_service(persistence) -> CatalogService:
    return CatalogService(persistence)


@pytest.fixture
def subscription_service(catalog_service, persistence, clock) -> SubscriptionService:
    return SubscriptionService(catalog_service, persistence, clock=clock)
