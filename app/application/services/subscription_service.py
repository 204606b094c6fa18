from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from dateutil.relativedelta import relativedelta

from ...domain.errors import ErrorKind, MalformedIdentifierError, SubscriptionError
from ...domain.models import Subscription, SubscriptionStatus
from ...domain.ports.persistence import SubscriptionRepository
from .catalog_service import CatalogService

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def add_months(value: datetime, months: int) -> datetime:
    """Shift ``value`` by calendar months, rolling day overflow into the next month.

    31 Jan + 1 month is 2 Mar in a leap year, not the last day of February.
    """
    first_of_month = value.replace(day=1) + relativedelta(months=months)
    return first_of_month + timedelta(days=value.day - 1)


class SubscriptionService:
    """Creates subscriptions from catalog products and applies status transitions.

    Legal transitions are active <-> paused, active -> cancelled and
    paused -> cancelled. Cancelled is terminal. Resuming a paused subscription
    moves its end date forward by the time it spent paused.
    """

    def __init__(
        self,
        catalog: CatalogService,
        repository: SubscriptionRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._catalog = catalog
        self._repository = repository
        self._clock = clock

    def purchase(self, product_id: str, email: str) -> Subscription:
        if not product_id or not email:
            raise SubscriptionError(
                ErrorKind.INVALID_ARGUMENT, "product id and email are required"
            )

        records = self._catalog.get_product(product_id)
        if not records:
            raise SubscriptionError(ErrorKind.NOT_FOUND, f"product {product_id}")

        product = records[0]
        now = self._clock()
        subscription = Subscription(
            email=email,
            product_name=product.name,
            created_at=now,
            start_date=now,
            end_date=add_months(now, product.subscription_period),
            price=product.price,
            tax=product.tax_amount(),
            status=SubscriptionStatus.ACTIVE,
        )
        saved = self._repository.save_subscription(subscription)
        logger.info("Subscription %s created for product %s", saved.id, product.id)
        return saved

    def get_by_id(self, subscription_id: str) -> Subscription:
        """Fetch a subscription. Storage's not-found error propagates unchanged."""
        if not subscription_id:
            raise SubscriptionError(ErrorKind.INVALID_ARGUMENT, "subscription id is required")
        return self._load(subscription_id)

    def update_status(
        self, subscription_id: str, status: SubscriptionStatus
    ) -> Subscription:
        if not subscription_id:
            raise SubscriptionError(ErrorKind.INVALID_ARGUMENT, "subscription id is required")

        current = self._load(subscription_id)
        if status is current.status:
            raise SubscriptionError(
                ErrorKind.STATUS_UNCHANGED, f"subscription is already {status.value}"
            )
        if current.status is SubscriptionStatus.CANCELLED:
            raise SubscriptionError(
                ErrorKind.NOT_ALLOWED, "cancelled subscription status change"
            )

        now = self._clock()
        updated = dataclasses.replace(current, status=status, updated_at=now)

        if current.status is SubscriptionStatus.PAUSED and status is SubscriptionStatus.ACTIVE:
            # pause_start_date stays set after resuming; the next pause overwrites it.
            updated.end_date = current.end_date + (now - current.pause_start_date)
        elif current.status is SubscriptionStatus.ACTIVE and status is SubscriptionStatus.PAUSED:
            updated.pause_start_date = now

        saved = self._repository.save_subscription(updated)
        logger.info(
            "Subscription %s changed from %s to %s",
            saved.id,
            current.status.value,
            status.value,
        )
        return saved

    def _load(self, subscription_id: str) -> Subscription:
        try:
            return self._repository.get_subscription_by_id(subscription_id)
        except MalformedIdentifierError as exc:
            raise SubscriptionError(
                ErrorKind.INVALID_ARGUMENT, f"invalid argument: {exc}"
            ) from exc
