"""
Migration engine.

A migration is a named, pure ``Snapshot -> Snapshot`` transform that runs at
most once per snapshot lineage. Which migrations have run is recorded in
the snapshot itself (``migrationsApplied``), so the record travels with the
data between devices.

Because remote-wins sync can hand a device a snapshot whose effects were
already applied elsewhere, every migration must also be a no-op when run
again on its own output.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from domain.models import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    """A registered one-time transform."""

    key: str
    apply: Callable[[Snapshot], Snapshot]
    description: str = ""


class MigrationEngine:
    """
    Ordered registry of migrations.

    Usage:
        >>> engine = MigrationEngine([Migration("merge-duplicates-v1", merge_duplicates_v1)])
        >>> migrated = engine.run(snapshot)
        >>> if migrated is None:
        ...     print("already up to date")
    """

    def __init__(self, migrations: Sequence[Migration]):
        seen = set()
        for migration in migrations:
            if migration.key in seen:
                raise ValueError(f"Duplicate migration key: {migration.key}")
            seen.add(migration.key)
        self._migrations = tuple(migrations)

    @property
    def migrations(self) -> Sequence[Migration]:
        return self._migrations

    @property
    def keys(self) -> List[str]:
        return [migration.key for migration in self._migrations]

    def pending(self, snapshot: Snapshot) -> List[Migration]:
        """Migrations whose key is not yet recorded on the snapshot."""
        applied = set(snapshot.applied_migrations)
        return [m for m in self._migrations if m.key not in applied]

    def run(self, snapshot: Optional[Snapshot]) -> Optional[Snapshot]:
        """
        Apply every pending migration in registry order.

        Args:
            snapshot: Snapshot to migrate (None is treated as nothing to do)

        Returns:
            The migrated snapshot, or None when no migration was pending
        """
        if snapshot is None:
            return None

        pending = self.pending(snapshot)
        if not pending:
            return None

        for migration in pending:
            logger.info(f"[Migrations] Running {migration.key}...")
            snapshot = migration.apply(snapshot).with_migration(migration.key)
            logger.info(f"[Migrations] {migration.key} complete.")

        return snapshot
