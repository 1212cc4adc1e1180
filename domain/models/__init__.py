"""
Domain models for the lifting log.

These models describe the persisted snapshot document and are independent
of storage concerns (local file, Supabase row).

- Snapshot: the aggregate root, read and written whole
- Exercise: a user-defined exercise (name + category)
- Program / ProgramDay / DayExercise: training programs
- LogEntry: tagged union of SetLogEntry (current) and SessionLogEntry (legacy)

Usage:
    >>> from domain.models import Snapshot, parse_snapshot

    >>> snapshot = parse_snapshot({"exercises": [], "log": [{"entries": []}]})
    >>> snapshot.log[0].kind
    'session'
"""

from domain.models.base import EntityId, SnapshotModel
from domain.models.exercise import Exercise
from domain.models.log_entry import (
    BaseLogEntry,
    LogEntry,
    SessionEntry,
    SessionExercise,
    SessionLogEntry,
    SessionSet,
    SetLogEntry,
    SESSION_KIND,
    SET_KIND,
    parse_log_entries,
    parse_log_entry,
    timestamp_millis,
)
from domain.models.program import DayExercise, Program, ProgramDay
from domain.models.snapshot import Snapshot, default_snapshot, parse_snapshot

__all__ = [
    # Aggregate root
    "Snapshot",
    "default_snapshot",
    "parse_snapshot",
    # Entities
    "Exercise",
    "Program",
    "ProgramDay",
    "DayExercise",
    # Log entries
    "LogEntry",
    "BaseLogEntry",
    "SetLogEntry",
    "SessionLogEntry",
    "SessionEntry",
    "SessionExercise",
    "SessionSet",
    "SET_KIND",
    "SESSION_KIND",
    "parse_log_entry",
    "parse_log_entries",
    "timestamp_millis",
    # Base
    "SnapshotModel",
    "EntityId",
]
