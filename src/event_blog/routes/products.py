"""Product routes."""

from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status

from event_blog.models.product_models import Product, ProductCreate
from event_blog.routes.dependencies import get_services
from event_blog.services import Services

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[Product])
async def list_products(
    stock_id: Optional[uuid.UUID] = Query(None, alias="stockId", description="Only products of this stock"),
    services: Services = Depends(get_services),
):
    return await services.products.list_products(str(stock_id) if stock_id else None)


@router.put("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreate, services: Services = Depends(get_services)):
    return await services.products.create_product(payload)


@router.delete("/{product_id}")
async def delete_product(product_id: uuid.UUID, services: Services = Depends(get_services)):
    deleted = await services.products.delete_product(str(product_id))
    return {"deleted_product": deleted}
