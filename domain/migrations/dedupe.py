"""
Exercise-list deduplication migrations.

- ``exercise_dedupe_v4`` collapses rows whose names differ only by case or
  surrounding whitespace.
- ``definitive_merge_v7`` folds every spelling of the canonical exercises
  (punctuation, spacing and plurals ignored) into one row per canonical
  name and renames the log to match.

When several rows collapse into one, a row already carrying the exact
canonical name wins over a variant; otherwise the first row wins. v4 keeps
the original relative order; v7 moves exact canonical rows to the front
before collapsing.
"""

import logging
from typing import Dict, List, Set

from domain.migrations.merge import ensure_canonical_rows, rename_log_entries
from domain.migrations.rules import (
    DEFINITIVE_MERGE_V7_RULES,
    PREFERRED_NAMES,
    alphanumeric,
    casefolded,
    lookup_table,
)
from domain.models import Exercise, Snapshot

logger = logging.getLogger(__name__)


def exercise_dedupe_v4(snapshot: Snapshot) -> Snapshot:
    """Keep one exercise row per case-insensitive name; drop nameless rows."""
    if snapshot.exercises is None:
        return snapshot

    seen: Dict[str, Exercise] = {}
    for exercise in snapshot.exercises:
        if not exercise.name:
            continue
        key = casefolded(exercise.name)
        current = seen.get(key)
        if current is None:
            seen[key] = exercise
        elif exercise.name in PREFERRED_NAMES and current.name not in PREFERRED_NAMES:
            seen[key] = exercise

    deduped = list(seen.values())
    dropped = len(snapshot.exercises) - len(deduped)
    if dropped:
        logger.info(f"[Migrations] Dropped {dropped} duplicate exercise row(s)")
    return snapshot.model_copy(update={"exercises": deduped})


def definitive_merge_v7(snapshot: Snapshot) -> Snapshot:
    """Normalize all canonical spellings, one row per canonical exercise."""
    table = lookup_table(DEFINITIVE_MERGE_V7_RULES, alphanumeric)
    snapshot = rename_log_entries(snapshot, table, alphanumeric)

    if snapshot.exercises is None:
        return snapshot

    def final_key(exercise: Exercise) -> str:
        rule = table.get(alphanumeric(exercise.name))
        return alphanumeric(rule.name if rule else exercise.name)

    def is_exact_canonical(exercise: Exercise) -> bool:
        rule = table.get(alphanumeric(exercise.name))
        return rule is not None and exercise.name == rule.name

    # Exact canonical spellings go first (stable), so they win their key.
    ordered = sorted(snapshot.exercises, key=lambda exercise: not is_exact_canonical(exercise))
    seen: Set[str] = set()
    cleaned: List[Exercise] = []
    for exercise in ordered:
        key = final_key(exercise)
        if key in seen:
            continue
        seen.add(key)
        rule = table.get(alphanumeric(exercise.name))
        cleaned.append(exercise.renamed(rule.name, rule.category) if rule else exercise)

    return snapshot.model_copy(
        update={
            "exercises": ensure_canonical_rows(
                cleaned, DEFINITIVE_MERGE_V7_RULES, stamp=True
            )
        }
    )
