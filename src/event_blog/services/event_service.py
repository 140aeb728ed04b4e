"""Event listing and creation over the `events` collection."""

from typing import List

from event_blog.database.documents import parse_documents
from event_blog.database.provisioner import EVENTS_COLLECTION, CollectionProvisioner
from event_blog.managers.logging_manager import get_logger
from event_blog.models.event_models import EVENT_STATUS_OPEN, Event, EventCreate

logger = get_logger(prefix="[EventService]")


class EventService:
    def __init__(self, provisioner: CollectionProvisioner):
        self.provisioner = provisioner
        self.manager = provisioner.manager

    async def list_events(self) -> List[Event]:
        collection = await self.provisioner.get_collection(EVENTS_COLLECTION)
        documents = await self.manager.run(EVENTS_COLLECTION, "find", collection.find({}).to_list(length=None))
        return parse_documents(Event, documents, EVENTS_COLLECTION)

    async def create_event(self, request: EventCreate) -> Event:
        """Store a new event; status defaults to `OPEN`."""
        event = Event(
            event_owner=str(request.event_owner),
            title=request.title,
            start_at=request.start_at,
            end_at=request.end_at,
            location=request.location or None,
            status=request.status or EVENT_STATUS_OPEN,
        )

        collection = await self.provisioner.get_collection(EVENTS_COLLECTION)
        await self.manager.run(EVENTS_COLLECTION, "insert_one", collection.insert_one(event.model_dump()))
        logger.info("Created event %s for owner %s", event.event_id, event.event_owner)
        return event
