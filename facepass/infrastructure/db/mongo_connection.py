# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING

# Local application imports
from ...core.config import get_settings
from ...domain.constants import TicketFields
from ...domain.services.ticket_lifecycle import CLAIM_HOLDING_STATUSES

logger = logging.getLogger(__name__)

CLAIM_INDEX_NAME = "one_claim_holding_ticket_per_holder"


# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = get_settings()
    _mongo_client = AsyncIOMotorClient(settings.mongo_uri)
    _mongo_database = _mongo_client[settings.mongo_database_name]
    return _mongo_database


def get_user_collection() -> AsyncIOMotorCollection:
    """Get operator accounts collection from MongoDB"""
    return get_database()["users"]


def get_event_collection() -> AsyncIOMotorCollection:
    """Get events collection from MongoDB"""
    return get_database()["events"]


def get_ticket_collection() -> AsyncIOMotorCollection:
    """Get tickets collection from MongoDB"""
    return get_database()["tickets"]


async def ensure_ticket_indexes(ticket_collection: AsyncIOMotorCollection) -> None:
    """
    Create the ticket indexes (idempotent)

    The partial unique index makes (event_id, holder_email) unique among
    tickets that still hold the claim, so concurrent issues for one holder
    cannot both insert. Requires MongoDB 6.0+ ($in in partial filters).
    """
    statuses = sorted(status.value for status in CLAIM_HOLDING_STATUSES)
    await ticket_collection.create_index(
        [(TicketFields.EVENT_ID, ASCENDING), (TicketFields.HOLDER_EMAIL, ASCENDING)],
        name=CLAIM_INDEX_NAME,
        unique=True,
        partialFilterExpression={TicketFields.STATUS: {"$in": statuses}},
    )
    await ticket_collection.create_index(
        [(TicketFields.EVENT_ID, ASCENDING), (TicketFields.PURCHASED_AT, DESCENDING)],
        name="tickets_by_event",
    )
    logger.info("Ticket indexes ensured")
