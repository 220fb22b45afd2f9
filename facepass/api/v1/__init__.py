from .auth_controller import router as auth_router
from .users_controller import router as users_router
from .event_controller import router as events_router
from .ticket_controller import router as tickets_router
from .gate_controller import router as gate_router
from .notifications_controller import router as notifications_router


__all__ = ["auth_router", "users_router", "events_router", "tickets_router", "gate_router", "notifications_router"]
