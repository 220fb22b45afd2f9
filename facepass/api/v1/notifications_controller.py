"""WebSocket endpoint streaming full per-event snapshots"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from ...application.services.event_snapshot_service import EventSnapshotService
from ...application.use_cases.auth.get_current_operator import GetCurrentOperatorUseCase
from ...domain.models.user import UserRole, has_permission
from ...di.container import get_container
from ...infrastructure.notifications.snapshot_feed import OrderedSnapshotSender, SnapshotFeed

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])


@router.websocket("/ws/events/{event_id}")
async def event_snapshots(
    websocket: WebSocket,
    event_id: str,
    token: Optional[str] = Query(None, description="Session token for authentication"),
):
    """
    Stream snapshots of one event to an operator.

    The current snapshot is sent right after connecting; afterwards every
    change to the event or its tickets pushes a new complete snapshot.

    Example connection:
        ws://host/api/v1/notifications/ws/events/<event_id>?token=<jwt_token>
    """
    if not token:
        await websocket.close(code=1008, reason="Authentication token required")
        return

    container = get_container()
    try:
        operator = await container.get(GetCurrentOperatorUseCase).execute(token)
    except ValueError as e:
        logger.warning(f"Invalid token for WebSocket connection: {e}")
        await websocket.close(code=1008, reason="Invalid or expired token")
        return

    if not has_permission(operator.role, UserRole.OPERATOR):
        await websocket.close(code=1008, reason="Operator role required")
        return

    snapshot_service = container.get(EventSnapshotService)
    if await snapshot_service.build(event_id) is None:
        await websocket.close(code=1008, reason="Event not found")
        return

    await websocket.accept()
    logger.info(f"Snapshot stream opened for event {event_id} by {operator.user_id}")

    # Subscribe before reading the initial state so no change falls in between;
    # the sender drops whichever of the two turns out older.
    sender = OrderedSnapshotSender(websocket.send_json)
    unsubscribe = container.get(SnapshotFeed).subscribe(event_id, sender)
    try:
        snapshot = await snapshot_service.build(event_id)
        if snapshot is not None:
            await sender(snapshot)

        # Keep connection alive and handle incoming messages (ping/pong)
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"Ignoring client message on event {event_id} stream: {message}")
    except WebSocketDisconnect:
        logger.info(f"Snapshot stream closed for event {event_id}")
    except Exception as e:
        logger.error(f"Error in snapshot stream for event {event_id}: {e}", exc_info=True)
    finally:
        unsubscribe()
