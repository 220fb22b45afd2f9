"""In-process snapshot feed: per-topic subscriptions that always receive full snapshots"""

import asyncio
import logging
from threading import Lock
from typing import Any, Awaitable, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Dict[str, Any]], Awaitable[None]]


class SnapshotFeed:
    """
    Publish/subscribe hub keyed by topic (an event id).

    Every publish carries the complete current snapshot of the topic, never a
    diff, so a subscriber that missed notifications is correct again after the
    next one. The last snapshot per topic is retained for late subscribers.
    """

    def __init__(self):
        # Map topic -> list of subscriber callbacks
        self._subscribers: Dict[str, List[SnapshotCallback]] = {}
        self._latest: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()
        logger.info("SnapshotFeed initialized")

    def subscribe(self, topic: str, callback: SnapshotCallback) -> Callable[[], None]:
        """
        Register a callback for a topic.

        Returns:
            A function that removes this subscription (idempotent)
        """
        with self._lock:
            self._subscribers.setdefault(topic, []).append(callback)

        logger.info(f"Subscribed to topic {topic}. Total subscriptions: {self.get_total_subscriptions()}")

        def unsubscribe() -> None:
            self._remove(topic, callback)

        return unsubscribe

    def _remove(self, topic: str, callback: SnapshotCallback) -> None:
        with self._lock:
            callbacks = self._subscribers.get(topic)
            if not callbacks:
                return
            if callback in callbacks:
                callbacks.remove(callback)
            if not callbacks:
                del self._subscribers[topic]

    async def publish(self, topic: str, snapshot: Dict[str, Any]) -> int:
        """
        Deliver a full snapshot to every subscriber of ``topic``.

        A subscriber whose callback raises is dropped; the others still
        receive the snapshot.

        Returns:
            Number of subscribers the snapshot was delivered to
        """
        with self._lock:
            self._latest[topic] = snapshot
            callbacks = list(self._subscribers.get(topic, []))

        if not callbacks:
            logger.debug(f"No subscribers for topic {topic}")
            return 0

        delivered = 0
        failed: List[SnapshotCallback] = []
        for callback in callbacks:
            try:
                await callback(snapshot)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping subscriber of topic {topic} after delivery failure: {e}")
                failed.append(callback)

        for callback in failed:
            self._remove(topic, callback)

        logger.debug(f"Delivered snapshot for {topic} to {delivered}/{len(callbacks)} subscribers")
        return delivered

    def latest(self, topic: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._latest.get(topic)

    def get_topics(self) -> List[str]:
        with self._lock:
            return list(self._subscribers.keys())

    def get_total_subscriptions(self) -> int:
        with self._lock:
            return sum(len(callbacks) for callbacks in self._subscribers.values())

    def has_subscribers(self, topic: str) -> bool:
        with self._lock:
            return bool(self._subscribers.get(topic))


class OrderedSnapshotSender:
    """
    Forwards snapshots to one connection, newest-wins.

    The initial snapshot of a connection and change-feed pushes are built
    concurrently and may arrive out of order. A snapshot whose ``sequence`` is
    not newer than the last one sent is dropped, so a client never steps back
    to older state.
    """

    def __init__(self, send: SnapshotCallback):
        self._send = send
        self._lock = asyncio.Lock()
        self.last_sequence = 0

    async def __call__(self, snapshot: Dict[str, Any]) -> None:
        async with self._lock:
            sequence = snapshot.get("sequence", 0)
            if sequence <= self.last_sequence:
                logger.debug(f"Skipping stale snapshot {sequence} (already sent {self.last_sequence})")
                return
            await self._send(snapshot)
            self.last_sequence = sequence
