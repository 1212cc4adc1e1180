"""
RecentWorkoutsProjection Use Case.

A best-effort, read-only view of the most recent meaningful workouts in the
remote log. It never raises: fetch failures and malformed payloads collapse
to an empty result.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Set, Tuple, Union

from pydantic import ValidationError

from application.ports import RemoteRowReader
from domain.models import BaseLogEntry, SessionLogEntry, Snapshot, parse_log_entries, parse_log_entry

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 5
SUMMARY_EXERCISE_LIMIT = 3

SnapshotLoader = Callable[[], Awaitable[Optional[Snapshot]]]


def select_recent_workouts(
    entries: Iterable[BaseLogEntry], limit: int = DEFAULT_RECENT_LIMIT
) -> List[BaseLogEntry]:
    """
    Keep meaningful workouts, newest first, truncated to ``limit``.

    Entries with equal timestamps keep their log order.
    """
    meaningful = [entry for entry in entries if entry.is_meaningful()]
    meaningful.sort(key=lambda entry: entry.sort_millis, reverse=True)
    return meaningful[:limit]


@dataclass(frozen=True)
class RecentWorkoutSummary:
    """Display row for one recent workout."""

    key: Optional[str]
    timestamp: Optional[Union[int, float, str]]
    exercise_count: int
    set_count: int
    completed: bool
    top_exercises: List[Tuple[str, int]] = field(default_factory=list)
    more_exercises: int = 0

    @classmethod
    def from_entry(cls, entry: BaseLogEntry) -> "RecentWorkoutSummary":
        exercises = (entry.exercises or []) if isinstance(entry, SessionLogEntry) else []
        completed = bool(getattr(entry, "completed", False))
        return cls(
            key=entry.identity_key(),
            timestamp=entry.effective_timestamp,
            exercise_count=len(exercises),
            set_count=sum(len(exercise.sets or []) for exercise in exercises),
            completed=completed,
            top_exercises=[
                (exercise.name or "", len(exercise.sets or []))
                for exercise in exercises[:SUMMARY_EXERCISE_LIMIT]
            ],
            more_exercises=max(len(exercises) - SUMMARY_EXERCISE_LIMIT, 0),
        )


class RecentWorkoutsProjection:
    """
    Holds the recent-workouts list shown on the progress view.

    The log is fetched through ``loader`` when one is injected, falling back
    to a direct ``row_reader.fetch_row()`` when there is no loader or it
    raises.

    Deleted items are remembered by identity key until the remote log no
    longer contains them, so a delete whose remote push has not landed yet
    does not reappear on the next refresh.
    """

    def __init__(
        self,
        row_reader: Optional[RemoteRowReader] = None,
        *,
        loader: Optional[SnapshotLoader] = None,
        limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self._row_reader = row_reader
        self._loader = loader
        self._limit = limit
        self._deleted_keys: Set[str] = set()
        self._items: Optional[List[BaseLogEntry]] = None

    @property
    def items(self) -> Optional[List[BaseLogEntry]]:
        """Current result; None until the first refresh finishes."""
        return None if self._items is None else list(self._items)

    @property
    def deleted_keys(self) -> Set[str]:
        return set(self._deleted_keys)

    async def refresh(self) -> List[BaseLogEntry]:
        try:
            entries = await self._fetch_entries()
        except Exception:
            logger.exception("Recent workouts load failed")
            entries = None

        if entries is None:
            # No payload: keep remembered deletions, the remote may still hold them.
            self._items = []
            return []

        present = {entry.identity_key() for entry in entries}
        self._deleted_keys &= present
        visible = [entry for entry in entries if entry.identity_key() not in self._deleted_keys]

        self._items = select_recent_workouts(visible, self._limit)
        return list(self._items)

    def on_deleted(self, item: Union[BaseLogEntry, Dict[str, Any]]) -> None:
        """Drop ``item`` from the current result without waiting for a refresh."""
        try:
            entry = item if isinstance(item, BaseLogEntry) else parse_log_entry(item)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable deleted item: {e.error_count()} error(s)")
            return

        key = entry.identity_key()
        if key is None:
            logger.debug("Deleted item has neither id nor timestamp; nothing to drop")
            return

        self._deleted_keys.add(key)
        if self._items is not None:
            self._items = [i for i in self._items if i.identity_key() != key]

    def summaries(self) -> List[RecentWorkoutSummary]:
        return [RecentWorkoutSummary.from_entry(entry) for entry in self._items or []]

    async def _fetch_entries(self) -> Optional[List[BaseLogEntry]]:
        """The remote log, or None when no payload could be obtained."""
        if self._loader is not None:
            try:
                snapshot = await self._loader()
            except Exception as e:
                logger.warning(f"Snapshot loader failed ({e}); reading remote row directly")
            else:
                if snapshot is None:
                    return None
                return list(snapshot.log or [])

        if self._row_reader is None:
            logger.warning("No remote reader configured; recent workouts unavailable")
            return None

        row = await asyncio.to_thread(self._row_reader.fetch_row)
        data = (row or {}).get("data")
        if not isinstance(data, dict):
            return None
        log = data.get("log", [])
        if not isinstance(log, list):
            logger.warning("Remote log is not a list; ignoring payload")
            return None
        return parse_log_entries(log)
