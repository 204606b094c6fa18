"""API router for buying and managing subscriptions."""

from fastapi import APIRouter, Depends, HTTPException, status

from ....application.services.subscription_service import SubscriptionService
from ....core.dependencies import get_subscription_service
from ....domain.models import Subscription, SubscriptionStatus
from ..errors import to_http_exception
from ..schemas.subscription_schemas import BuySubscriptionRequest, SubscriptionResponse

router = APIRouter(prefix="/api/v1/subscription", tags=["subscription-api"])

# Path vocabulary for status changes.
_STATUS_BY_ACTION = {
    "active": SubscriptionStatus.ACTIVE,
    "pause": SubscriptionStatus.PAUSED,
    "cancel": SubscriptionStatus.CANCELLED,
}


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def buy_subscription(
    request: BuySubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    """Create a subscription for the buyer with the given product."""
    try:
        subscription = service.purchase(request.product_id, str(request.email_id))
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return _serialize_subscription(subscription)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
async def get_subscription_by_id(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    try:
        subscription = service.get_by_id(subscription_id)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return _serialize_subscription(subscription)


@router.patch("/{subscription_id}/changeStatus/{action}", response_model=SubscriptionResponse)
async def update_subscription_status(
    subscription_id: str,
    action: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    """Pause, resume or cancel a subscription."""
    new_status = _STATUS_BY_ACTION.get(action)
    if new_status is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid status value")
    try:
        subscription = service.update_status(subscription_id, new_status)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return _serialize_subscription(subscription)


def _serialize_subscription(subscription: Subscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=subscription.id,
        created_at=subscription.created_at,
        email=subscription.email,
        product_name=subscription.product_name,
        start_date=subscription.start_date,
        end_date=subscription.end_date,
        price=subscription.price,
        tax=subscription.tax,
        status=subscription.status.value,
        updated_at=subscription.updated_at,
        pause_start_date=subscription.pause_start_date,
    )
