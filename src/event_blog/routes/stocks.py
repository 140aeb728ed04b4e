"""Stock routes."""

from typing import List
import uuid

from fastapi import APIRouter, Depends, status

from event_blog.models.stock_models import Stock, StockCreate, StockDeletionResult
from event_blog.routes.dependencies import get_services
from event_blog.services import Services

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("", response_model=List[Stock])
async def list_stocks(services: Services = Depends(get_services)):
    return await services.stocks.list_stocks()


@router.post("", response_model=Stock, status_code=status.HTTP_201_CREATED)
async def create_stock(payload: StockCreate, services: Services = Depends(get_services)):
    return await services.stocks.create_stock(payload)


@router.delete("/{stock_id}", response_model=StockDeletionResult)
async def delete_stock(stock_id: uuid.UUID, services: Services = Depends(get_services)):
    """Delete a stock and every product referencing it."""
    return await services.stocks.delete_stock(str(stock_id))
