"""
Dependency wiring for the FastAPI app and scripts.
"""

from __future__ import annotations

from backend.config import get_settings
from shared.snapshot_store import (
    InMemorySnapshotStore,
    RealtimeDbSnapshotStore,
    SnapshotStore,
)

_snapshot_store: SnapshotStore | None = None


def get_snapshot_store() -> SnapshotStore:
    """
    Return a singleton snapshot store so every view shares one Firebase app.
    """
    global _snapshot_store
    if _snapshot_store:
        return _snapshot_store

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.firebase_database_url:
        _snapshot_store = InMemorySnapshotStore()
    else:
        _snapshot_store = RealtimeDbSnapshotStore(
            database_url=settings.firebase_database_url
        )
    return _snapshot_store


def reset_snapshot_store() -> None:
    global _snapshot_store
    _snapshot_store = None
