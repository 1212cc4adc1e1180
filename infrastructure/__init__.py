"""
Infrastructure Layer for the lifting log.

This package contains concrete implementations of the store interfaces:
- db/: Supabase remote snapshot row (and the offline stand-in)
- local/: JSON file snapshot on the device
"""

# Re-export stores for convenient access
from infrastructure.db import (
    OfflineSnapshotRepository,
    SupabaseSnapshotRepository,
)
from infrastructure.local import JsonFileSnapshotStore

__all__ = [
    "SupabaseSnapshotRepository",
    "OfflineSnapshotRepository",
    "JsonFileSnapshotStore",
]
