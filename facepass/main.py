# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import auth_router, users_router, events_router, tickets_router, gate_router, notifications_router
from .application.services.event_snapshot_service import EventSnapshotService
from .di.container import get_container
from .infrastructure.db.mongo_connection import ensure_ticket_indexes
from .infrastructure.http_client_factory import close_shared_http_client
from .infrastructure.notifications import MongoChangeFeed

logger = logging.getLogger(__name__)

# Global instances
_change_feed: Optional[MongoChangeFeed] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Builds the DI container, ensures the ticket indexes and starts the change
    feed that turns database writes into event snapshot pushes.
    """
    global _change_feed

    try:
        await ensure_ticket_indexes(get_container().get("ticket_collection"))
    except Exception as e:
        # Issuance still checks claims, but concurrent duplicates are no longer blocked
        logger.error(f"Failed to ensure ticket indexes: {e}", exc_info=True)

    try:
        container = get_container()
        snapshot_service = container.get(EventSnapshotService)
        _change_feed = MongoChangeFeed(
            on_event_changed=snapshot_service.publish,
            ticket_collection=container.get("ticket_collection"),
            event_collection=container.get("event_collection"),
        )
        _change_feed.start()
    except Exception as e:
        logger.error(f"Failed to start change feed: {e}", exc_info=True)
        # Gate and enrollment keep working without live snapshots
        _change_feed = None

    yield

    if _change_feed:
        try:
            await _change_feed.stop()
        except Exception as e:
            logger.error(f"Error stopping change feed: {e}", exc_info=True)
        _change_feed = None

    await close_shared_http_client()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    application = FastAPI(
        title="FacePass API",
        version="1.0.0",
        description="Biometric ticketing and gate admission backend",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(auth_router, prefix="/api/v1/auth")
    application.include_router(users_router, prefix="/api/v1/users")
    application.include_router(events_router, prefix="/api/v1/events")
    application.include_router(tickets_router, prefix="/api/v1/tickets")
    application.include_router(gate_router, prefix="/api/v1/gate")
    application.include_router(notifications_router, prefix="/api/v1/notifications")

    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok"}

    return application


app = create_application()
