"""
Schema migrations for the lifting-log snapshot.

Migrations are registered here in the order they must run. Keys are
permanent: once shipped, a key is never renamed or reused, because
snapshots in the wild already record it.

Usage:
    >>> from domain.migrations import run_migrations
    >>> migrated = run_migrations(snapshot)
    >>> snapshot = migrated or snapshot
"""

from typing import Optional

from domain.migrations.dedupe import definitive_merge_v7, exercise_dedupe_v4
from domain.migrations.engine import Migration, MigrationEngine
from domain.migrations.merge import (
    merge_duplicates_v1,
    merge_duplicates_v2,
    merge_duplicates_v3,
)
from domain.models import Snapshot

MERGE_DUPLICATES_V1 = "merge-duplicates-v1"
MERGE_DUPLICATES_V2 = "merge-duplicates-v2"
MERGE_DUPLICATES_V3 = "merge-duplicates-v3"
EXERCISE_DEDUPE_V4 = "exercise-dedupe-v4"
DEFINITIVE_MERGE_V7 = "definitive-merge-v7"

DEFAULT_MIGRATIONS = (
    Migration(
        MERGE_DUPLICATES_V1,
        merge_duplicates_v1,
        "Merge Face Pulls, DB Benchpress and Lateral Raise into their canonical names",
    ),
    Migration(
        MERGE_DUPLICATES_V2,
        merge_duplicates_v2,
        "Case-insensitive merge of the v1 exercises",
    ),
    Migration(
        MERGE_DUPLICATES_V3,
        merge_duplicates_v3,
        "Merge squat and row variants",
    ),
    Migration(
        EXERCISE_DEDUPE_V4,
        exercise_dedupe_v4,
        "Collapse exercise rows differing only by case",
    ),
    Migration(
        DEFINITIVE_MERGE_V7,
        definitive_merge_v7,
        "Punctuation- and plural-insensitive merge of all canonical exercises",
    ),
)

default_engine = MigrationEngine(DEFAULT_MIGRATIONS)


def run_migrations(
    snapshot: Optional[Snapshot],
    engine: Optional[MigrationEngine] = None,
) -> Optional[Snapshot]:
    """Run pending migrations; None means there was nothing to do."""
    return (engine or default_engine).run(snapshot)


__all__ = [
    "Migration",
    "MigrationEngine",
    "DEFAULT_MIGRATIONS",
    "default_engine",
    "run_migrations",
    "MERGE_DUPLICATES_V1",
    "MERGE_DUPLICATES_V2",
    "MERGE_DUPLICATES_V3",
    "EXERCISE_DEDUPE_V4",
    "DEFINITIVE_MERGE_V7",
]
