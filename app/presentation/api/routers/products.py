"""API router for the product catalog."""

from fastapi import APIRouter, Depends, HTTPException, status

from ....application.services.catalog_service import CatalogService
from ....core.dependencies import get_catalog_service
from ....domain.models import Product
from ..errors import to_http_exception
from ..schemas.product import ProductListResponse, ProductResponse

router = APIRouter(prefix="/api/v1/product", tags=["product-api"])


@router.get("", response_model=ProductListResponse)
async def get_all_products(
    service: CatalogService = Depends(get_catalog_service),
) -> ProductListResponse:
    """Get every product in the catalog."""
    try:
        products = service.get_product("")
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return ProductListResponse(products=[_serialize_product(item) for item in products])


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product_by_id(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    """Get a single product."""
    try:
        products = service.get_product(product_id)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    if not products:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="product not found for given id",
        )
    return _serialize_product(products[0])


def _serialize_product(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        subscription_period=product.subscription_period,
        price=product.price,
        tax_percentage=product.tax_percentage,
    )
