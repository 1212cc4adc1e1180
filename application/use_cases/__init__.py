"""
Application Use Cases for the lifting log.

This package contains application-level use cases that orchestrate domain
logic and coordinate between the snapshot store ports.

- SyncCoordinator: startup reconciliation and write-through propagation
  between the local and remote snapshot copies
- RecentWorkoutsProjection: best-effort view of the latest meaningful
  workouts in the remote log

Dependencies are injected via constructors for testability.

Usage:
    from application.use_cases import SyncCoordinator, RecentWorkoutsProjection

    coordinator = SyncCoordinator(local_store=local_store, remote_store=remote_store)
    snapshot = await coordinator.start()

    projection = RecentWorkoutsProjection(remote_store, limit=5)
    recent = await projection.refresh()
"""

from application.use_cases.recent_workouts import (
    DEFAULT_RECENT_LIMIT,
    RecentWorkoutsProjection,
    RecentWorkoutSummary,
    select_recent_workouts,
)
from application.use_cases.sync_snapshot import (
    SyncCoordinator,
    SyncStatus,
)

__all__ = [
    # Sync
    "SyncCoordinator",
    "SyncStatus",
    # Recent workouts
    "RecentWorkoutsProjection",
    "RecentWorkoutSummary",
    "select_recent_workouts",
    "DEFAULT_RECENT_LIMIT",
]
