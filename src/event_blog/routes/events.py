"""Event routes."""

from typing import List

from fastapi import APIRouter, Depends, status

from event_blog.models.event_models import Event, EventCreate
from event_blog.routes.dependencies import get_services
from event_blog.services import Services

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=List[Event])
async def list_events(services: Services = Depends(get_services)):
    return await services.events.list_events()


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(payload: EventCreate, services: Services = Depends(get_services)):
    """Create an event. `end_at` before `start_at` is rejected with 422."""
    return await services.events.create_event(payload)
