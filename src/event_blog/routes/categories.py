"""Category routes."""

from typing import List
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status

from event_blog.models.category_models import Category, CategoryCreate, CategoryDeletionResult
from event_blog.routes.dependencies import get_services
from event_blog.services import Services

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[Category])
async def list_categories(
    stock_id: uuid.UUID = Query(..., alias="stockId", description="Stock whose categories to list"),
    services: Services = Depends(get_services),
):
    return await services.categories.list_categories(str(stock_id))


@router.post("", response_model=List[Category], status_code=status.HTTP_201_CREATED)
async def create_categories(payload: List[CategoryCreate], services: Services = Depends(get_services)):
    """Bulk create categories."""
    if not payload:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="at least one category is required")
    return await services.categories.create_categories(payload)


@router.delete("/{category_id}", response_model=CategoryDeletionResult)
async def delete_category(category_id: uuid.UUID, services: Services = Depends(get_services)):
    """Clear the category on the stock's matching products, then delete it. Unknown id answers 404."""
    return await services.categories.delete_category(str(category_id))
