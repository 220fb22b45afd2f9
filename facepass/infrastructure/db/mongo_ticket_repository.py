# Standard library imports
from decimal import Decimal
from typing import Any, Dict, List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

# Local application imports
from ...domain.exceptions import DuplicateClaimError
from ...domain.repositories.ticket_repository import TicketRepository
from ...domain.models.face import FaceDescriptor
from ...domain.models.ticket import Ticket, TicketClass, TicketHolder, TicketStatus, normalize_email
from ...domain.constants import TicketFields
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_ticket_collection


def _to_object_id(ticket_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(ticket_id)
    except (InvalidId, ValueError, TypeError):
        return None


class MongoTicketRepository(TicketRepository):
    """
    MongoDB implementation of TicketRepository.

    Every status change is a single find_one_and_update whose filter pins the
    expected status, so two gates racing on one ticket cannot both win.
    """

    def __init__(self, ticket_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.ticket_collection = ticket_collection if ticket_collection is not None else get_ticket_collection()

    async def create(self, ticket: Ticket) -> Ticket:
        if not ticket:
            raise ValueError("Ticket cannot be None")

        doc = self._ticket_to_dict(ticket)
        try:
            result = await self.ticket_collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateClaimError(
                f"{ticket.holder.email} already holds a ticket for event {ticket.event_id}",
                details={"event_id": ticket.event_id},
            )
        except Exception as e:
            raise RuntimeError(f"Error creating ticket: {str(e)}")
        doc[TicketFields.MONGO_ID] = result.inserted_id
        return self._document_to_ticket(doc)

    async def find_by_id(self, ticket_id: str) -> Optional[Ticket]:
        object_id = _to_object_id(ticket_id) if ticket_id else None
        if object_id is None:
            return None
        try:
            doc = await self.ticket_collection.find_one({TicketFields.MONGO_ID: object_id})
        except Exception as e:
            raise RuntimeError(f"Error finding ticket by ID: {str(e)}")
        return self._document_to_ticket(doc) if doc else None

    async def find_unused_by_claim(self, event_id: str, email: str) -> List[Ticket]:
        if not event_id or not email:
            return []
        query = {
            TicketFields.EVENT_ID: event_id,
            TicketFields.HOLDER_EMAIL: normalize_email(email),
            TicketFields.STATUS: {"$ne": TicketStatus.USED.value},
        }
        try:
            cursor = self.ticket_collection.find(query).sort(TicketFields.PURCHASED_AT, -1)
            tickets: List[Ticket] = []
            async for doc in cursor:
                tickets.append(self._document_to_ticket(doc))
            return tickets
        except Exception as e:
            raise RuntimeError(f"Error resolving ticket claim: {str(e)}")

    async def list_by_event(self, event_id: str) -> List[Ticket]:
        if not event_id:
            return []
        try:
            cursor = self.ticket_collection.find({TicketFields.EVENT_ID: event_id}).sort(
                TicketFields.PURCHASED_AT, -1
            )
            tickets: List[Ticket] = []
            async for doc in cursor:
                tickets.append(self._document_to_ticket(doc))
            return tickets
        except Exception as e:
            raise RuntimeError(f"Error listing tickets for event: {str(e)}")

    async def transition_status(
        self,
        ticket_id: str,
        expected: TicketStatus,
        new_status: TicketStatus,
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> Optional[Ticket]:
        object_id = _to_object_id(ticket_id)
        if object_id is None:
            return None

        update_fields: Dict[str, Any] = dict(extra_fields or {})
        update_fields[TicketFields.STATUS] = new_status.value
        update_fields[TicketFields.UPDATED_AT] = utc_now()

        try:
            doc = await self.ticket_collection.find_one_and_update(
                {TicketFields.MONGO_ID: object_id, TicketFields.STATUS: expected.value},
                {"$set": update_fields},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise RuntimeError(f"Error updating ticket status: {str(e)}")
        return self._document_to_ticket(doc) if doc else None

    async def bind_face(
        self,
        ticket_id: str,
        descriptor: Optional[FaceDescriptor],
        face_image: Optional[str],
    ) -> Optional[Ticket]:
        object_id = _to_object_id(ticket_id)
        if object_id is None:
            return None

        now = utc_now()
        update_fields: Dict[str, Any] = {
            TicketFields.STATUS: TicketStatus.ACTIVE.value,
            TicketFields.ENROLLED_AT: now,
            TicketFields.UPDATED_AT: now,
            TicketFields.FACE_IMAGE: face_image,
        }
        if descriptor is not None:
            update_fields[TicketFields.FACE_DESCRIPTOR] = list(descriptor.values)
            update_fields[TicketFields.FACE_DESCRIPTOR_METHOD] = descriptor.method

        query = {
            TicketFields.MONGO_ID: object_id,
            TicketFields.STATUS: TicketStatus.PAID_PENDING_FACE.value,
            TicketFields.FACE_DESCRIPTOR: None,
            TicketFields.FACE_IMAGE: None,
        }
        try:
            doc = await self.ticket_collection.find_one_and_update(
                query,
                {"$set": update_fields},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise RuntimeError(f"Error binding face to ticket: {str(e)}")
        return self._document_to_ticket(doc) if doc else None

    def _document_to_ticket(self, doc: dict) -> Ticket:
        price = doc.get(TicketFields.PRICE) or Decimal("0")
        if isinstance(price, Decimal128):
            price = price.to_decimal()

        descriptor = None
        values = doc.get(TicketFields.FACE_DESCRIPTOR)
        if values:
            descriptor = FaceDescriptor.from_sequence(
                values, doc.get(TicketFields.FACE_DESCRIPTOR_METHOD) or "unknown"
            )

        return Ticket(
            id=str(doc.get(TicketFields.MONGO_ID)),
            event_id=doc.get(TicketFields.EVENT_ID) or "",
            holder=TicketHolder(
                name=doc.get(TicketFields.HOLDER_NAME) or "",
                email=doc.get(TicketFields.HOLDER_EMAIL) or "",
                national_id=doc.get(TicketFields.HOLDER_NATIONAL_ID) or "",
            ),
            ticket_class=TicketClass(doc.get(TicketFields.TICKET_CLASS, TicketClass.STANDARD.value)),
            price=Decimal(price),
            status=TicketStatus(doc.get(TicketFields.STATUS)),
            purchased_at=doc.get(TicketFields.PURCHASED_AT),
            face_descriptor=descriptor,
            face_image=doc.get(TicketFields.FACE_IMAGE),
            enrolled_at=doc.get(TicketFields.ENROLLED_AT),
            used_at=doc.get(TicketFields.USED_AT),
            updated_at=doc.get(TicketFields.UPDATED_AT),
        )

    def _ticket_to_dict(self, ticket: Ticket) -> dict:
        return {
            TicketFields.EVENT_ID: ticket.event_id,
            TicketFields.HOLDER_NAME: ticket.holder.name,
            TicketFields.HOLDER_EMAIL: ticket.holder.email,
            TicketFields.HOLDER_NATIONAL_ID: ticket.holder.national_id,
            TicketFields.TICKET_CLASS: ticket.ticket_class.value,
            TicketFields.PRICE: Decimal128(str(ticket.price)),
            TicketFields.STATUS: ticket.status.value,
            TicketFields.PURCHASED_AT: ticket.purchased_at,
            TicketFields.FACE_DESCRIPTOR: list(ticket.face_descriptor.values) if ticket.face_descriptor else None,
            TicketFields.FACE_DESCRIPTOR_METHOD: ticket.face_descriptor.method if ticket.face_descriptor else None,
            TicketFields.FACE_IMAGE: ticket.face_image,
            TicketFields.ENROLLED_AT: ticket.enrolled_at,
            TicketFields.USED_AT: ticket.used_at,
            TicketFields.UPDATED_AT: ticket.updated_at,
        }
