"""
Exercise definitions stored in the snapshot's ``exercises`` list.

The ``name`` is the human-facing identity of an exercise; ``id`` is a
stable surrogate key. After migration there is at most one row per
distinct name.
"""

from typing import Optional

from pydantic import Field

from domain.models.base import EntityId, SnapshotModel


class Exercise(SnapshotModel):
    """
    A user-defined exercise.

    Examples:
        >>> Exercise(id="ex1", name="Bench Press", category="Chest").to_document()
        {'id': 'ex1', 'name': 'Bench Press', 'category': 'Chest'}
    """

    id: Optional[EntityId] = None
    name: Optional[str] = None
    category: Optional[str] = None
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    def recategorized(self, category: str) -> "Exercise":
        """Return a copy with a new category (self when unchanged)."""
        if self.category == category:
            return self
        return self.model_copy(update={"category": category})

    def renamed(self, name: str, category: str) -> "Exercise":
        """Return a copy carrying a canonical name and category."""
        if self.name == name and self.category == category:
            return self
        return self.model_copy(update={"name": name, "category": category})
