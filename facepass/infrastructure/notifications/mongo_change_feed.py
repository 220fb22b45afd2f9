"""
MongoDB change-stream watcher that turns ticket/event writes into snapshot pushes.

Each change only tells us WHICH event moved; the handler rebuilds the whole
snapshot of that event. Change streams need a replica set or sharded cluster;
on a standalone server the watcher logs a warning and stays idle.
"""
# Standard library imports
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import OperationFailure, PyMongoError

# Local application imports
from ...domain.constants import TicketFields
from ..db.mongo_connection import get_event_collection, get_ticket_collection

logger = logging.getLogger(__name__)

EventChangedHandler = Callable[[str], Awaitable[Any]]


def event_id_from_ticket_change(change: Dict[str, Any]) -> Optional[str]:
    document = change.get("fullDocument") or {}
    event_id = document.get(TicketFields.EVENT_ID)
    return str(event_id) if event_id else None


def event_id_from_event_change(change: Dict[str, Any]) -> Optional[str]:
    document_key = change.get("documentKey") or {}
    event_id = document_key.get("_id")
    return str(event_id) if event_id is not None else None


class MongoChangeFeed:
    """Background watchers over the tickets and events collections"""

    RETRY_DELAY_SECONDS = 5.0

    def __init__(
        self,
        on_event_changed: EventChangedHandler,
        ticket_collection: Optional[AsyncIOMotorCollection] = None,
        event_collection: Optional[AsyncIOMotorCollection] = None,
    ) -> None:
        self.on_event_changed = on_event_changed
        self.ticket_collection = ticket_collection if ticket_collection is not None else get_ticket_collection()
        self.event_collection = event_collection if event_collection is not None else get_event_collection()
        self._tasks: List[asyncio.Task] = []

    def start(self) -> None:
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._watch(self.ticket_collection, event_id_from_ticket_change, "tickets")),
            asyncio.create_task(self._watch(self.event_collection, event_id_from_event_change, "events")),
        ]
        logger.info("Mongo change feed started")

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Mongo change feed stopped")

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def _watch(
        self,
        collection: AsyncIOMotorCollection,
        resolve_event_id: Callable[[Dict[str, Any]], Optional[str]],
        name: str,
    ) -> None:
        while True:
            try:
                async with collection.watch(full_document="updateLookup") as stream:
                    logger.info(f"Watching {name} collection for changes")
                    async for change in stream:
                        await self.handle_change(change, resolve_event_id)
            except asyncio.CancelledError:
                raise
            except OperationFailure as e:
                logger.warning(f"Change streams unavailable on {name} collection, push feed disabled: {e}")
                return
            except PyMongoError as e:
                logger.error(f"Change stream on {name} collection failed, retrying: {e}")
                await asyncio.sleep(self.RETRY_DELAY_SECONDS)

    async def handle_change(
        self,
        change: Dict[str, Any],
        resolve_event_id: Callable[[Dict[str, Any]], Optional[str]],
    ) -> None:
        event_id = resolve_event_id(change)
        if not event_id:
            logger.debug(f"Ignoring {change.get('operationType')} change without event reference")
            return
        try:
            await self.on_event_changed(event_id)
        except Exception as e:
            logger.error(f"Failed to publish snapshot for event {event_id}: {e}", exc_info=True)
