"""
Snapshot Store Interfaces (Ports).

This module defines the abstract interfaces for the two copies of the
lifting-log snapshot: the on-device copy and the single shared remote row.
Implementations may use a JSON file, Supabase, or in-memory storage.

Neither store raises to its caller: failures are logged and degrade to a
well-defined default (structural default snapshot, ``None``, or ``False``).
"""
from typing import Any, Dict, Optional, Protocol

from domain.models import Snapshot


class LocalSnapshotStore(Protocol):
    """
    Synchronous on-device snapshot storage under one fixed key.
    """

    def read(self) -> Snapshot:
        """
        Read the last written snapshot.

        Returns:
            The stored snapshot, or the structural default
            (``{workouts: [], exercises: []}``) when nothing is stored or the
            stored value cannot be parsed
        """
        ...

    def write(self, snapshot: Snapshot) -> bool:
        """
        Persist the snapshot synchronously.

        Args:
            snapshot: Snapshot to store (replaces the previous one)

        Returns:
            True if written; False if the write failed (logged, non-fatal)
        """
        ...


class RemoteSnapshotStore(Protocol):
    """
    The single shared remote row holding the canonical snapshot.

    Writes unconditionally overwrite the row: there is no concurrency check
    and no merge, so the last writer to complete wins.
    """

    def load(self) -> Optional[Snapshot]:
        """
        Fetch the snapshot from the fixed row.

        Returns:
            The snapshot, or None if the row is missing, its ``data`` field is
            missing or malformed, or the backend is unreachable
        """
        ...

    def save(self, snapshot: Snapshot) -> bool:
        """
        Upsert the fixed row with the snapshot and the current timestamp.

        Args:
            snapshot: Snapshot to store

        Returns:
            True on success; False on any backend error (logged)
        """
        ...


class RemoteRowReader(Protocol):
    """
    Direct read of the raw remote row.

    Unlike RemoteSnapshotStore.load(), backend errors propagate so the
    caller can decide how to degrade.
    """

    def fetch_row(self) -> Optional[Dict[str, Any]]:
        """
        Read the raw row (``{"data": ..., "updated_at": ...}``).

        Returns:
            The row dict, or None when no row exists
        """
        ...
