"""
SyncCoordinator Use Case.

Reconciles the local and remote snapshot copies at startup and propagates
every later change to both.

Startup (``start``):
1. Fetch the remote snapshot.
2. Remote present: it becomes canonical and overwrites the local copy,
   including any local-only edits made while offline (remote-wins).
3. Remote absent: the local snapshot (or the default) is pushed and kept.
4. The canonical snapshot runs through the migration engine; a changed
   result is written to both stores.
5. Commits made while the steps above awaited the remote are pushed last.

After startup each mutation is written to the local store synchronously and
pushed to the remote store as a fire-and-forget task. There is no
debouncing: every mutation issues its own remote write.

The Supabase client is blocking, so remote calls run in a worker thread via
``asyncio.to_thread``; coordinator state is only touched on the event loop.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Set

from application.ports import LocalSnapshotStore, RemoteSnapshotStore
from domain.migrations import MigrationEngine, default_engine
from domain.models import Snapshot

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"


@dataclass
class SyncStatus:
    """Observable sync state for the view layer."""

    started: bool = False
    source: Optional[str] = None
    online: bool = True
    pending_pushes: int = 0
    last_pushed_at: Optional[datetime] = None
    last_error: Optional[str] = None


class SyncCoordinator:
    """
    Owns the canonical snapshot and keeps both stores in step with it.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> coordinator = SyncCoordinator(local_store, remote_store)
        >>> snapshot = await coordinator.start()
        >>> coordinator.mutate(lambda s: s.model_copy(update={"log": [...]}))
        >>> await coordinator.drain()
    """

    def __init__(
        self,
        local_store: LocalSnapshotStore,
        remote_store: RemoteSnapshotStore,
        *,
        migration_engine: Optional[MigrationEngine] = None,
        online: bool = True,
    ) -> None:
        """
        Initialize the coordinator with its stores.

        Args:
            local_store: On-device snapshot store
            remote_store: Shared remote snapshot row
            migration_engine: Engine to run after every reconciliation
                (defaults to the registered migrations)
            online: False when no remote backend is configured; pushes are
                skipped instead of being reported as failures
        """
        self._local = local_store
        self._remote = remote_store
        self._engine = migration_engine or default_engine
        self._snapshot: Optional[Snapshot] = None
        self._pending: Set["asyncio.Task[bool]"] = set()
        self.status = SyncStatus(online=online)

    @property
    def snapshot(self) -> Snapshot:
        """
        The canonical snapshot.

        Before startup completes this is the local copy, so the app has data
        to show while offline.
        """
        if self._snapshot is None:
            self._snapshot = self._local.read()
        return self._snapshot

    # =========================================================================
    # Reconciliation
    # =========================================================================

    async def start(self) -> Snapshot:
        """Run the startup reconciliation and return the canonical snapshot."""
        remote = await asyncio.to_thread(self._remote.load)

        if remote is not None:
            logger.info("Remote snapshot found; replacing local copy")
            self._snapshot = remote
            self._local.write(remote)
            self.status.source = SOURCE_REMOTE
            pushed = remote
        else:
            logger.info("No remote snapshot; pushing local copy")
            pushed = self.snapshot
            await self._push(pushed)
            self.status.source = SOURCE_LOCAL

        migrated = await self._migrate()
        if migrated is not None:
            pushed = migrated
        self.status.started = True
        # Commits made while startup awaited the remote were deferred.
        if self.snapshot is not pushed:
            logger.info("Snapshot changed during startup; pushing latest copy")
            await self._push(self.snapshot)
        return self.snapshot

    async def refresh(self) -> Snapshot:
        """
        Re-pull the remote snapshot on demand.

        A remote snapshot replaces the canonical and local copies
        (remote-wins); when the remote is empty or unreachable nothing changes.
        """
        remote = await asyncio.to_thread(self._remote.load)
        if remote is None:
            logger.info("Refresh found no remote snapshot; keeping current state")
            return self.snapshot

        self._snapshot = remote
        self._local.write(remote)
        await self._migrate()
        return self.snapshot

    async def _migrate(self) -> Optional[Snapshot]:
        """Migrate the current canonical snapshot; None when already up to date."""
        try:
            migrated = self._engine.run(self.snapshot)
        except Exception:
            logger.exception("Migration run failed; keeping un-migrated snapshot")
            migrated = None

        if migrated is None:
            return None

        self._snapshot = migrated
        self._local.write(migrated)
        await self._push(migrated)
        return migrated

    # =========================================================================
    # Mutations
    # =========================================================================

    def commit(self, snapshot: Snapshot) -> Snapshot:
        """
        Make ``snapshot`` canonical: write it locally, then push it remotely.

        Must be called from the running event loop. The remote push is not
        awaited; use ``drain()`` to wait for in-flight pushes. Before startup
        completes only the local copy is written.
        """
        self._snapshot = snapshot
        self._local.write(snapshot)

        if not self.status.started:
            logger.debug("Startup sync not finished; remote push deferred")
            return snapshot

        task = asyncio.get_running_loop().create_task(self._push(snapshot))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return snapshot

    def mutate(self, change: Callable[[Snapshot], Snapshot]) -> Snapshot:
        """Apply ``change`` to the canonical snapshot and commit the result."""
        return self.commit(change(self.snapshot))

    async def push_now(self) -> bool:
        """Push the canonical snapshot and wait for the result."""
        return await self._push(self.snapshot)

    async def drain(self) -> None:
        """Wait for every in-flight fire-and-forget push."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _push(self, snapshot: Snapshot) -> bool:
        if not self.status.online:
            logger.debug("Remote sync disabled; push skipped")
            return False

        self.status.pending_pushes += 1
        try:
            saved = await asyncio.to_thread(self._remote.save, snapshot)
        except Exception as e:
            logger.exception("Remote push failed")
            saved = False
            self.status.last_error = str(e)
        finally:
            self.status.pending_pushes -= 1

        if saved:
            self.status.last_pushed_at = datetime.now(timezone.utc)
            self.status.last_error = None
        elif self.status.last_error is None:
            self.status.last_error = "Remote save failed"
        return bool(saved)
