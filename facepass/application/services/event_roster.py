"""Client-side view of one event, kept current from snapshot notifications"""

from typing import Any, Dict, List, Optional


class EventRoster:
    """
    Consumer of event snapshots.

    ``apply`` replaces the whole state with the received snapshot; nothing is
    merged, so stale or out-of-order partial data cannot accumulate.
    """

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        self.event: Optional[Dict[str, Any]] = None
        self.tickets: List[Dict[str, Any]] = []
        self.generated_at: Optional[str] = None
        self.version = 0

    async def apply(self, snapshot: Dict[str, Any]) -> None:
        if snapshot.get("event_id") != self.event_id:
            return
        self.event = dict(snapshot.get("event") or {})
        self.tickets = [dict(ticket) for ticket in snapshot.get("tickets") or []]
        self.generated_at = snapshot.get("generated_at")
        self.version += 1

    def count_by_status(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for ticket in self.tickets:
            status = ticket.get("status", "")
            counts[status] = counts.get(status, 0) + 1
        return counts

    @property
    def capacity_remaining(self) -> Optional[int]:
        if self.event is None:
            return None
        return self.event.get("capacity_remaining")
