"""
Store Interfaces (Ports) for the lifting log.

This package defines abstract interfaces that decouple the sync and
projection use cases from storage (local file, Supabase). Implementations
are provided in the infrastructure layer; in-memory fakes live in
tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import LocalSnapshotStore, RemoteSnapshotStore

    class SyncCoordinator:
        def __init__(self, local_store: LocalSnapshotStore, remote_store: RemoteSnapshotStore):
            self._local = local_store
            self._remote = remote_store
"""

from application.ports.snapshot_store import (
    LocalSnapshotStore,
    RemoteRowReader,
    RemoteSnapshotStore,
)

__all__ = [
    "LocalSnapshotStore",
    "RemoteSnapshotStore",
    "RemoteRowReader",
]
