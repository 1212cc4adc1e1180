"""
Snapshot aggregate: the whole lifting-log database as one document.

The snapshot is the unit of persistence, replication and migration. It is
always read and written whole; a user action produces a new Snapshot value
instead of editing one in place.
"""

from typing import Any, List, Optional

from pydantic import Field

from domain.models.base import SnapshotModel
from domain.models.exercise import Exercise
from domain.models.log_entry import LogEntry, SessionLogEntry
from domain.models.program import Program


class Snapshot(SnapshotModel):
    """
    Root aggregate persisted locally and in the remote row.

    Every collection may be absent (None). ``migrations_applied`` is the only
    schema version signal: a key present means that migration already ran on
    this snapshot's lineage.

    Examples:
        >>> snapshot = Snapshot.model_validate({"exercises": [{"name": "Row"}]})
        >>> snapshot.to_document()
        {'exercises': [{'name': 'Row'}]}
    """

    workouts: Optional[List[Any]] = None
    exercises: Optional[List[Exercise]] = None
    programs: Optional[List[Program]] = None
    log: Optional[List[LogEntry]] = None
    migrations_applied: Optional[List[str]] = Field(
        default=None, alias="migrationsApplied"
    )

    @property
    def applied_migrations(self) -> List[str]:
        """Applied migration keys (empty when the collection is absent)."""
        return list(self.migrations_applied or [])

    @property
    def sessions(self) -> List[SessionLogEntry]:
        """Log entries in the session shape."""
        return [entry for entry in self.log or [] if isinstance(entry, SessionLogEntry)]

    def exercise_names(self) -> List[Optional[str]]:
        return [exercise.name for exercise in self.exercises or []]

    def with_migration(self, key: str) -> "Snapshot":
        """Return a copy with ``key`` appended to ``migrationsApplied``."""
        applied = self.applied_migrations
        if key in applied:
            return self
        return self.model_copy(update={"migrations_applied": [*applied, key]})


def default_snapshot() -> Snapshot:
    """The structural default used on first run or when stored data is unreadable."""
    return Snapshot(workouts=[], exercises=[])


def parse_snapshot(raw: Any) -> Snapshot:
    """
    Validate a raw JSON document into a Snapshot.

    Raises:
        pydantic.ValidationError: if ``raw`` is not a usable snapshot document
    """
    return Snapshot.model_validate(raw)
