"""
Workout log entries.

The ``log`` collection has held two shapes over the app's lifetime:

- ``set``: the current per-exercise record
  ``{id, programId, exerciseId, date, weight, notes}``
- ``session``: a whole workout carrying ``entries[]`` (each naming its
  exercise via ``exerciseName`` or ``name``) and/or ``exercises[]`` with
  ``sets[]``, stamped with ``date`` / ``endedAt`` / ``startedAt``

``LogEntry`` is a tagged union resolved by ``log_entry_kind`` when a
snapshot is read, so consumers branch on ``entry.kind`` instead of probing
optional fields. The tag is derived from the payload's shape and is never
written back.
"""

import logging
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Iterable, List, Optional, Union

from pydantic import Discriminator, Field, Tag, TypeAdapter, ValidationError

from domain.models.base import EntityId, NumericValue, SnapshotModel

logger = logging.getLogger(__name__)

SET_KIND = "set"
SESSION_KIND = "session"


def to_number(value: Any) -> float:
    """Coerce a stored set value to a float; blanks and garbage count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def timestamp_millis(value: Any) -> float:
    """
    Resolve a stored timestamp to epoch milliseconds.

    Numbers are taken as epoch milliseconds; strings are parsed as ISO-8601
    (naive values are treated as UTC) or, failing that, as a number.
    Anything unparseable sorts as epoch zero.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return to_number(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp() * 1000
    return 0.0


# =============================================================================
# Shared base
# =============================================================================


class BaseLogEntry(SnapshotModel):
    """Fields and helpers common to every log entry shape."""

    kind: ClassVar[str] = ""

    id: Optional[EntityId] = None
    date: Optional[Union[int, float, str]] = None
    ended_at: Optional[Union[int, float, str]] = Field(default=None, alias="endedAt")
    started_at: Optional[Union[int, float, str]] = Field(default=None, alias="startedAt")

    @property
    def effective_timestamp(self) -> Optional[Union[int, float, str]]:
        """First non-empty of ``date``, ``endedAt``, ``startedAt``."""
        for value in (self.date, self.ended_at, self.started_at):
            if value:
                return value
        return None

    @property
    def sort_millis(self) -> float:
        return timestamp_millis(self.effective_timestamp)

    def identity_key(self) -> Optional[str]:
        """
        Key used to match an entry across fetches.

        ``id:<id>`` when the entry has an id, otherwise ``ts:<timestamp>``.
        None when the entry carries neither.
        """
        if self.id is not None and self.id != "":
            return f"id:{self.id}"
        timestamp = self.effective_timestamp
        if timestamp is not None:
            return f"ts:{timestamp}"
        return None

    def is_meaningful(self) -> bool:
        return False


# =============================================================================
# Current shape
# =============================================================================


class SetLogEntry(BaseLogEntry):
    """A single logged exercise result (current shape)."""

    kind: ClassVar[str] = SET_KIND

    program_id: Optional[EntityId] = Field(default=None, alias="programId")
    exercise_id: Optional[EntityId] = Field(default=None, alias="exerciseId")
    weight: Optional[NumericValue] = None
    notes: Optional[str] = None


# =============================================================================
# Session shape
# =============================================================================


class SessionSet(SnapshotModel):
    reps: Optional[NumericValue] = None
    weight: Optional[NumericValue] = None
    rpe: Optional[NumericValue] = None
    notes: Optional[str] = None

    def is_meaningful(self) -> bool:
        """A set counts when it records any reps, weight, RPE or notes."""
        if to_number(self.reps) != 0 or to_number(self.weight) != 0 or to_number(self.rpe) != 0:
            return True
        return bool((self.notes or "").strip())


class SessionExercise(SnapshotModel):
    id: Optional[EntityId] = None
    name: Optional[str] = None
    sets: Optional[List[SessionSet]] = None

    def with_name(self, name: str) -> "SessionExercise":
        return self.model_copy(update={"name": name})


class SessionEntry(SnapshotModel):
    """Legacy per-exercise entry inside a session's ``entries[]``."""

    id: Optional[EntityId] = None
    exercise_name: Optional[str] = Field(default=None, alias="exerciseName")
    name: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        """The exercise name this entry refers to."""
        return self.exercise_name if self.exercise_name is not None else self.name

    def with_label(self, label: str) -> "SessionEntry":
        """Return a copy referring to ``label`` via whichever field carried the name."""
        field_name = "exercise_name" if self.exercise_name is not None else "name"
        return self.model_copy(update={field_name: label})


class SessionLogEntry(BaseLogEntry):
    """A logged workout session (legacy ``entries[]`` and/or ``exercises[].sets[]``)."""

    kind: ClassVar[str] = SESSION_KIND

    completed: Optional[bool] = None
    entries: Optional[List[SessionEntry]] = None
    exercises: Optional[List[SessionExercise]] = None

    def is_meaningful(self) -> bool:
        """True when at least one exercise has at least one meaningful set."""
        return any(
            any(s.is_meaningful() for s in exercise.sets or [])
            for exercise in self.exercises or []
        )

    @property
    def set_count(self) -> int:
        return sum(len(exercise.sets or []) for exercise in self.exercises or [])


# =============================================================================
# Tagged union + adapter
# =============================================================================


def log_entry_kind(value: Any) -> str:
    """Discriminate raw payloads by shape and parsed models by their kind."""
    if isinstance(value, dict):
        if "entries" in value or "exercises" in value:
            return SESSION_KIND
        return SET_KIND
    return getattr(value, "kind", SET_KIND) or SET_KIND


LogEntry = Annotated[
    Union[
        Annotated[SetLogEntry, Tag(SET_KIND)],
        Annotated[SessionLogEntry, Tag(SESSION_KIND)],
    ],
    Discriminator(log_entry_kind),
]

log_entry_adapter: TypeAdapter = TypeAdapter(LogEntry)


def parse_log_entry(raw: Any) -> BaseLogEntry:
    """Parse one raw log item. Raises ValidationError on unusable input."""
    return log_entry_adapter.validate_python(raw)


def parse_log_entries(raw_items: Iterable[Any]) -> List[BaseLogEntry]:
    """Parse raw log items, skipping any that cannot be read."""
    entries: List[BaseLogEntry] = []
    for raw in raw_items:
        try:
            entries.append(parse_log_entry(raw))
        except ValidationError as e:
            logger.warning(f"Skipping unreadable log entry: {e.error_count()} error(s)")
    return entries
