"""
Training programs: a program holds days, a day holds exercise placements.

Each placement is a copy of an Exercise plus its own ``eid`` so the same
exercise can appear on several days (or twice on one day) independently.
"""

from typing import List, Optional

from domain.models.base import EntityId, SnapshotModel
from domain.models.exercise import Exercise


class DayExercise(Exercise):
    """An Exercise copy placed on a program day."""

    eid: Optional[EntityId] = None


class ProgramDay(SnapshotModel):
    id: Optional[EntityId] = None
    name: Optional[str] = None
    exercises: Optional[List[DayExercise]] = None


class Program(SnapshotModel):
    id: Optional[EntityId] = None
    name: Optional[str] = None
    days: Optional[List[ProgramDay]] = None

    @property
    def total_placements(self) -> int:
        """Number of exercise placements across all days."""
        return sum(len(day.exercises or []) for day in self.days or [])
