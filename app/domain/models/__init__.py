"""Domain models for the subscription service."""

from .product import Product
from .subscription import Subscription, SubscriptionStatus

__all__ = [
    "Product",
    "Subscription",
    "SubscriptionStatus",
]
