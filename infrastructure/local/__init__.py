"""
Infrastructure Local Storage Layer.

On-device persistence for the lifting-log snapshot.
"""

from infrastructure.local.json_snapshot_store import (
    LOCAL_STORAGE_KEY,
    JsonFileSnapshotStore,
)

__all__ = [
    "JsonFileSnapshotStore",
    "LOCAL_STORAGE_KEY",
]
