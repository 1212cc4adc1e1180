"""
Shared base for snapshot document models.

Snapshots are written by several generations of clients, so every model
keeps unknown keys (``extra="allow"``) and is serialized with
``exclude_unset=True``: a field that was absent when read stays absent
when written back.
"""

from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict

# Historic clients generated numeric ids (Date.now() + Math.random()),
# newer ones use strings. Both must round-trip unchanged.
EntityId = Union[int, float, str]

# Set fields arrive as numbers or as raw form strings ("", "80").
NumericValue = Union[int, float, str]


class SnapshotModel(BaseModel):
    """Immutable, extension-tolerant base for all snapshot models."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON shape (camelCase, unset fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
