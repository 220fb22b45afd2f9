from .account_guard import AccountGuard
from .admission_controller import AdmissionController
from .event_roster import EventRoster
from .event_snapshot_service import EventSnapshotService, build_snapshot

__all__ = [
    "AccountGuard",
    "AdmissionController",
    "EventRoster",
    "EventSnapshotService",
    "build_snapshot",
]
