# Standard library imports
from decimal import Decimal
from typing import Any, Dict, List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.errors import InvalidId
from pymongo import ReturnDocument

# Local application imports
from ...domain.repositories.event_repository import EventRepository
from ...domain.models.event import Event
from ...domain.constants import EventFields
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_event_collection


def _to_object_id(event_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(event_id)
    except (InvalidId, ValueError, TypeError):
        return None


class MongoEventRepository(EventRepository):
    """MongoDB implementation of EventRepository"""

    def __init__(self, event_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.event_collection = event_collection if event_collection is not None else get_event_collection()

    async def create(self, event: Event) -> Event:
        if not event:
            raise ValueError("Event cannot be None")

        doc = self._event_to_dict(event)
        doc[EventFields.CREATED_AT] = event.created_at or utc_now()
        try:
            result = await self.event_collection.insert_one(doc)
        except Exception as e:
            raise RuntimeError(f"Error creating event: {str(e)}")
        doc[EventFields.MONGO_ID] = result.inserted_id
        return self._document_to_event(doc)

    async def find_by_id(self, event_id: str) -> Optional[Event]:
        object_id = _to_object_id(event_id) if event_id else None
        if object_id is None:
            return None
        try:
            doc = await self.event_collection.find_one({EventFields.MONGO_ID: object_id})
        except Exception as e:
            raise RuntimeError(f"Error finding event by ID: {str(e)}")
        return self._document_to_event(doc) if doc else None

    async def list_active(self) -> List[Event]:
        try:
            cursor = self.event_collection.find({EventFields.IS_ACTIVE: True}).sort(EventFields.STARTS_AT, 1)
            events: List[Event] = []
            async for doc in cursor:
                events.append(self._document_to_event(doc))
            return events
        except Exception as e:
            raise RuntimeError(f"Error listing active events: {str(e)}")

    async def list_all(self) -> List[Event]:
        try:
            cursor = self.event_collection.find({}).sort(EventFields.CREATED_AT, -1)
            events: List[Event] = []
            async for doc in cursor:
                events.append(self._document_to_event(doc))
            return events
        except Exception as e:
            raise RuntimeError(f"Error listing events: {str(e)}")

    async def update(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        object_id = _to_object_id(event_id)
        if object_id is None:
            return None

        fields = dict(changes)
        if EventFields.PRICE in fields:
            fields[EventFields.PRICE] = Decimal128(str(fields[EventFields.PRICE]))
        fields[EventFields.UPDATED_AT] = utc_now()

        query: Dict[str, Any] = {EventFields.MONGO_ID: object_id}
        if EventFields.MAX_CAPACITY in fields:
            # Enrollments may land between the caller's read and this write
            query["$expr"] = {
                "$lte": [f"${EventFields.CURRENT_ATTENDEES}", fields[EventFields.MAX_CAPACITY]]
            }

        try:
            doc = await self.event_collection.find_one_and_update(
                query,
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise RuntimeError(f"Error updating event: {str(e)}")
        return self._document_to_event(doc) if doc else None

    async def increment_attendees(self, event_id: str, enforce_capacity: bool) -> Optional[Event]:
        object_id = _to_object_id(event_id)
        if object_id is None:
            return None

        query: Dict[str, Any] = {EventFields.MONGO_ID: object_id}
        if enforce_capacity:
            # Guard and increment in one conditional write so concurrent
            # enrollments cannot overshoot max_capacity.
            query["$expr"] = {
                "$lt": [f"${EventFields.CURRENT_ATTENDEES}", f"${EventFields.MAX_CAPACITY}"]
            }

        try:
            doc = await self.event_collection.find_one_and_update(
                query,
                {"$inc": {EventFields.CURRENT_ATTENDEES: 1}},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise RuntimeError(f"Error incrementing attendees: {str(e)}")
        return self._document_to_event(doc) if doc else None

    async def decrement_attendees(self, event_id: str) -> Optional[Event]:
        object_id = _to_object_id(event_id)
        if object_id is None:
            return None
        try:
            doc = await self.event_collection.find_one_and_update(
                {EventFields.MONGO_ID: object_id, EventFields.CURRENT_ATTENDEES: {"$gt": 0}},
                {"$inc": {EventFields.CURRENT_ATTENDEES: -1}},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise RuntimeError(f"Error decrementing attendees: {str(e)}")
        return self._document_to_event(doc) if doc else None

    def _document_to_event(self, doc: dict) -> Event:
        price = doc.get(EventFields.PRICE) or Decimal("0")
        if isinstance(price, Decimal128):
            price = price.to_decimal()
        return Event(
            id=str(doc.get(EventFields.MONGO_ID)),
            name=doc.get(EventFields.NAME) or "",
            description=doc.get(EventFields.DESCRIPTION) or "",
            location=doc.get(EventFields.LOCATION) or "",
            starts_at=doc.get(EventFields.STARTS_AT),
            max_capacity=int(doc.get(EventFields.MAX_CAPACITY) or 0),
            current_attendees=int(doc.get(EventFields.CURRENT_ATTENDEES) or 0),
            is_active=bool(doc.get(EventFields.IS_ACTIVE, False)),
            is_free=bool(doc.get(EventFields.IS_FREE, False)),
            price=Decimal(price),
            created_at=doc.get(EventFields.CREATED_AT),
            image_url=doc.get(EventFields.IMAGE_URL),
        )

    def _event_to_dict(self, event: Event) -> dict:
        return {
            EventFields.NAME: event.name,
            EventFields.DESCRIPTION: event.description,
            EventFields.LOCATION: event.location,
            EventFields.STARTS_AT: event.starts_at,
            EventFields.MAX_CAPACITY: event.max_capacity,
            EventFields.CURRENT_ATTENDEES: event.current_attendees,
            EventFields.IS_ACTIVE: event.is_active,
            EventFields.IS_FREE: event.is_free,
            EventFields.PRICE: Decimal128(str(event.price)),
            EventFields.IMAGE_URL: event.image_url,
        }
