"""
Domain layer for the lifting log.

This package contains the snapshot document models and the schema
migrations that run over them. Nothing here performs I/O.
"""

from domain.models import (
    Exercise,
    LogEntry,
    Program,
    SessionLogEntry,
    SetLogEntry,
    Snapshot,
    default_snapshot,
    parse_snapshot,
)

__all__ = [
    "Exercise",
    "LogEntry",
    "Program",
    "SessionLogEntry",
    "SetLogEntry",
    "Snapshot",
    "default_snapshot",
    "parse_snapshot",
]
