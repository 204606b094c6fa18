"""Subscription domain model for a buyer's purchase of a product."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class Subscription:
    """
    Subscription entity representing one buyer's purchase of one product.

    Attributes:
        id: Identifier assigned by storage on first save
        email: Buyer e-mail captured at purchase time
        product_name: Product name at purchase time
        created_at: Purchase timestamp (UTC)
        start_date: Start of the subscription window
        end_date: End of the subscription window, moved forward by pauses
        price: Base price copied from the product
        tax: Tax amount computed at purchase time
        status: Current lifecycle status
        updated_at: Timestamp of the last status change
        pause_start_date: When the subscription was last paused
    """

    email: str
    product_name: str
    created_at: datetime
    start_date: datetime
    end_date: datetime
    price: float
    tax: float
    status: SubscriptionStatus
    id: Optional[str] = None
    updated_at: Optional[datetime] = None
    pause_start_date: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} email={self.email} status={self.status.value}>"
