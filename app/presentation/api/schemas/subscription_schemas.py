"""Pydantic schemas for subscription API endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class BuySubscriptionRequest(BaseModel):
    """Request schema for buying a subscription."""

    product_id: str = Field(..., min_length=1)
    email_id: EmailStr


class SubscriptionResponse(BaseModel):
    """Response schema for subscription data."""

    id: str
    created_at: datetime
    email: str
    product_name: str
    start_date: datetime
    end_date: datetime
    price: float
    tax: float
    status: str
    updated_at: Optional[datetime] = None
    pause_start_date: Optional[datetime] = None
