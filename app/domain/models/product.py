"""Product domain model for the purchasable subscription catalog."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Product:
    """
    Catalog entry a subscription can be bought for.

    Attributes:
        id: Opaque product identifier
        name: Display name, copied onto subscriptions at purchase time
        subscription_period: Length of a subscription in months
        price: Base price, before tax
        tax_percentage: Tax rate applied on top of the price (0-100)
    """

    id: str
    name: str
    subscription_period: int
    price: float
    tax_percentage: float

    def tax_amount(self) -> float:
        return self.price * self.tax_percentage / 100
