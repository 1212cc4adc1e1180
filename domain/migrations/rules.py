"""
Canonical exercise rule tables.

Each table is an ordered tuple of ``CanonicalExercise`` directives: the
canonical name, the category it must carry, and the source spellings that
are renamed into it. Tables are plain data so the set of renames a
migration performs can be listed and tested without any snapshot.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

NameNormalizer = Callable[[Optional[str]], str]


@dataclass(frozen=True)
class CanonicalExercise:
    """Rename + recategorize directive for one canonical exercise."""

    name: str
    category: str
    aliases: Tuple[str, ...] = ()


def exact(name: Optional[str]) -> str:
    return name or ""


def casefolded(name: Optional[str]) -> str:
    """Lower-case, trimmed spelling."""
    return (name or "").lower().strip()


def alphanumeric(name: Optional[str]) -> str:
    """Lower-case spelling with every non-alphanumeric character removed."""
    return re.sub(r"[^a-z0-9]", "", (name or "").lower())


def lookup_table(
    rules: Sequence[CanonicalExercise],
    normalize: NameNormalizer,
) -> Dict[str, CanonicalExercise]:
    """
    Map every normalized spelling (canonical name included) to its directive.

    The canonical name maps to itself so re-applying a category fix to an
    already-canonical row is safe.
    """
    table: Dict[str, CanonicalExercise] = {}
    for rule in rules:
        for spelling in (*rule.aliases, rule.name):
            key = normalize(spelling)
            if key:
                table[key] = rule
    return table


# =============================================================================
# Rule tables, one per migration
# =============================================================================

MERGE_DUPLICATES_V1_RULES: Tuple[CanonicalExercise, ...] = (
    CanonicalExercise("Face Pull", "Back", aliases=("Face Pulls",)),
    CanonicalExercise("Bench Press", "Chest", aliases=("DB Benchpress",)),
    CanonicalExercise("Lateral Raises", "Shoulders", aliases=("Lateral Raise",)),
)

MERGE_DUPLICATES_V2_RULES: Tuple[CanonicalExercise, ...] = (
    CanonicalExercise("Face Pull", "Back", aliases=("face pull", "face pulls")),
    CanonicalExercise(
        "Lateral Raises", "Shoulders", aliases=("lateral raise", "lateral raises")
    ),
    CanonicalExercise(
        "Bench Press", "Chest", aliases=("db benchpress", "db bench press", "bench press")
    ),
)

MERGE_DUPLICATES_V3_RULES: Tuple[CanonicalExercise, ...] = (
    CanonicalExercise("Squat", "Legs", aliases=("back squat", "squat")),
    CanonicalExercise("Row", "Back", aliases=("low row", "row")),
)

DEFINITIVE_MERGE_V7_RULES: Tuple[CanonicalExercise, ...] = (
    CanonicalExercise("Face Pull", "Back", aliases=("face pull", "face pulls", "facepull")),
    CanonicalExercise(
        "Lateral Raises",
        "Shoulders",
        aliases=("lateral raise", "lateral raises", "lateralraise"),
    ),
    CanonicalExercise(
        "Bench Press",
        "Chest",
        aliases=("db benchpress", "db bench press", "bench press", "benchpress"),
    ),
    CanonicalExercise(
        "Squat", "Legs", aliases=("back squat", "back squats", "squat", "squats")
    ),
    CanonicalExercise("Row", "Back", aliases=("low row", "low rows", "row", "rows")),
)

# Every name the dedupe pass prefers to keep when spellings collide.
PREFERRED_NAMES = frozenset(rule.name for rule in DEFINITIVE_MERGE_V7_RULES)
