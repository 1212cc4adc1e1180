"""
Infrastructure Database Layer.

This package provides the Supabase-backed implementation of the remote
snapshot store defined in application.ports, plus the offline stand-in used
when no credentials are configured.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseSnapshotRepository

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repository with injected client
    remote_store = SupabaseSnapshotRepository(client, table="lifting_logs", row_id="main")
"""

from infrastructure.db.snapshot_repository import (
    DEFAULT_ROW_ID,
    DEFAULT_TABLE,
    OfflineSnapshotRepository,
    SupabaseSnapshotRepository,
)

__all__ = [
    # Remote snapshot persistence
    "SupabaseSnapshotRepository",
    "OfflineSnapshotRepository",
    "DEFAULT_TABLE",
    "DEFAULT_ROW_ID",
]
