"""
Fake Store Implementations for Testing.

This package provides in-memory fake implementations of the snapshot store
interfaces for fast, isolated testing. No file system or database required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with raw snapshot documents
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeRemoteSnapshotStore, create_remote_store

    # Direct instantiation
    remote = FakeRemoteSnapshotStore()
    remote.seed({"exercises": [], "log": []})

    # Factory function with pre-populated workouts
    remote = create_remote_store(num_workouts=7)
"""
from typing import Any, Dict, List, Optional

from tests.fakes.snapshot_store import FakeLocalSnapshotStore, FakeRemoteSnapshotStore


# =============================================================================
# Factory Functions
# =============================================================================


def create_workout(
    index: int,
    *,
    date: Optional[str] = None,
    sets: Optional[List[Dict[str, Any]]] = None,
    completed: bool = True,
) -> Dict[str, Any]:
    """
    Build a raw session-shaped log entry.

    Args:
        index: Used for the id and, without ``date``, a distinct day in Jan 2024
        date: Explicit ISO timestamp
        sets: Sets of the single exercise (defaults to one 5 x 100 set)

    Returns:
        Raw workout dict as stored in ``log``
    """
    return {
        "id": f"w{index}",
        "date": date or f"2024-01-{index + 1:02d}T10:00:00Z",
        "completed": completed,
        "exercises": [
            {
                "id": f"w{index}-e1",
                "name": "Bench Press",
                "sets": sets if sets is not None else [{"reps": 5, "weight": 100}],
            }
        ],
    }


def create_local_store(document: Optional[Dict[str, Any]] = None) -> FakeLocalSnapshotStore:
    """Create a FakeLocalSnapshotStore, optionally seeded."""
    store = FakeLocalSnapshotStore()
    if document is not None:
        store.seed(document)
    return store


def create_remote_store(
    document: Optional[Dict[str, Any]] = None,
    *,
    num_workouts: int = 0,
) -> FakeRemoteSnapshotStore:
    """
    Create a FakeRemoteSnapshotStore with an optional snapshot row.

    Args:
        document: Raw snapshot document to seed
        num_workouts: Number of meaningful workouts to put in ``log``

    Returns:
        Pre-populated FakeRemoteSnapshotStore
    """
    store = FakeRemoteSnapshotStore()

    if document is None and num_workouts > 0:
        document = {"exercises": [], "log": []}
    if document is not None and num_workouts > 0:
        document = {
            **document,
            "log": list(document.get("log") or [])
            + [create_workout(i) for i in range(num_workouts)],
        }
    if document is not None:
        store.seed(document)

    return store


__all__ = [
    # Fake implementations
    "FakeLocalSnapshotStore",
    "FakeRemoteSnapshotStore",
    # Factory functions
    "create_local_store",
    "create_remote_store",
    "create_workout",
]
