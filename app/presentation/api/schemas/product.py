"""Pydantic schemas for product API endpoints."""

from typing import List

from pydantic import BaseModel


class ProductResponse(BaseModel):
    """Response schema for a catalog product."""

    id: str
    name: str
    subscription_period: int
    price: float
    tax_percentage: float


class ProductListResponse(BaseModel):
    """Response schema for the full catalog."""

    products: List[ProductResponse]
