"""Notifications infrastructure for real-time event snapshots"""

from .snapshot_feed import OrderedSnapshotSender, SnapshotFeed
from .mongo_change_feed import MongoChangeFeed

__all__ = [
    "SnapshotFeed",
    "OrderedSnapshotSender",
    "MongoChangeFeed",
]
