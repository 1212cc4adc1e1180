"""
Rename-and-merge migrations for duplicate exercise spellings.

``merge_into_canonical`` applies one rule table to a snapshot:

1. Log: any session entry (or session exercise) whose name resolves to a
   rule is renamed to the canonical name.
2. Exercises: rows whose name resolves to a rule but is not the exact
   canonical spelling are removed (not renamed, which would duplicate an
   existing canonical row); rows carrying the canonical name get the rule's
   category.
3. Any canonical exercise with no row left is synthesized with a fresh id.

Missing ``log`` or ``exercises`` collections are skipped. Every step is
idempotent, so re-running on canonical data changes nothing.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from domain.migrations.rules import (
    CanonicalExercise,
    MERGE_DUPLICATES_V1_RULES,
    MERGE_DUPLICATES_V2_RULES,
    MERGE_DUPLICATES_V3_RULES,
    NameNormalizer,
    casefolded,
    exact,
    lookup_table,
)
from domain.models import Exercise, SessionLogEntry, Snapshot

logger = logging.getLogger(__name__)


def new_exercise_id() -> str:
    return str(uuid.uuid4())


def synthesize_exercise(rule: CanonicalExercise, *, stamp: bool = False) -> Exercise:
    """Build a new exercise row for a canonical directive."""
    if stamp:
        return Exercise(
            id=new_exercise_id(),
            name=rule.name,
            category=rule.category,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
    return Exercise(id=new_exercise_id(), name=rule.name, category=rule.category)


def _resolve(
    name: Optional[str],
    table: Dict[str, CanonicalExercise],
    normalize: NameNormalizer,
) -> Optional[CanonicalExercise]:
    if name is None:
        return None
    return table.get(normalize(name))


def rename_log_entries(
    snapshot: Snapshot,
    table: Dict[str, CanonicalExercise],
    normalize: NameNormalizer,
) -> Snapshot:
    """Rewrite exercise names inside session log entries to canonical names."""
    if snapshot.log is None:
        return snapshot

    renamed_any = False
    new_log = []
    for workout in snapshot.log:
        if not isinstance(workout, SessionLogEntry):
            new_log.append(workout)
            continue

        update = {}
        if workout.entries is not None:
            entries = []
            for entry in workout.entries:
                rule = _resolve(entry.label, table, normalize)
                if rule and entry.label != rule.name:
                    entries.append(entry.with_label(rule.name))
                    update["entries"] = entries
                else:
                    entries.append(entry)
        if workout.exercises is not None:
            exercises = []
            for exercise in workout.exercises:
                rule = _resolve(exercise.name, table, normalize)
                if rule and exercise.name != rule.name:
                    exercises.append(exercise.with_name(rule.name))
                    update["exercises"] = exercises
                else:
                    exercises.append(exercise)

        if update:
            renamed_any = True
            new_log.append(workout.model_copy(update=update))
        else:
            new_log.append(workout)

    if not renamed_any:
        return snapshot
    return snapshot.model_copy(update={"log": new_log})


def ensure_canonical_rows(
    exercises: List[Exercise],
    rules: Sequence[CanonicalExercise],
    *,
    stamp: bool = False,
) -> List[Exercise]:
    """Append a synthesized row for each canonical name with no row."""
    existing = {exercise.name for exercise in exercises}
    result = list(exercises)
    for rule in rules:
        if rule.name not in existing:
            logger.info(f"[Migrations] Adding missing canonical exercise '{rule.name}'")
            result.append(synthesize_exercise(rule, stamp=stamp))
    return result


def merge_into_canonical(
    snapshot: Snapshot,
    rules: Sequence[CanonicalExercise],
    normalize: NameNormalizer,
) -> Snapshot:
    """Apply one rule table to the log and the exercise list."""
    table = lookup_table(rules, normalize)
    snapshot = rename_log_entries(snapshot, table, normalize)

    if snapshot.exercises is None:
        return snapshot

    kept: List[Exercise] = []
    for exercise in snapshot.exercises:
        rule = _resolve(exercise.name, table, normalize)
        if rule is None:
            kept.append(exercise)
        elif exercise.name == rule.name:
            kept.append(exercise.recategorized(rule.category))
        else:
            logger.info(
                f"[Migrations] Removing duplicate exercise '{exercise.name}' (-> '{rule.name}')"
            )

    return snapshot.model_copy(
        update={"exercises": ensure_canonical_rows(kept, rules)}
    )


# =============================================================================
# Registered transforms
# =============================================================================


def merge_duplicates_v1(snapshot: Snapshot) -> Snapshot:
    """Exact-spelling merge of Face Pulls, DB Benchpress and Lateral Raise."""
    return merge_into_canonical(snapshot, MERGE_DUPLICATES_V1_RULES, exact)


def merge_duplicates_v2(snapshot: Snapshot) -> Snapshot:
    """Case- and whitespace-insensitive merge of the v1 exercises."""
    return merge_into_canonical(snapshot, MERGE_DUPLICATES_V2_RULES, casefolded)


def merge_duplicates_v3(snapshot: Snapshot) -> Snapshot:
    """Merge squat and row variants."""
    return merge_into_canonical(snapshot, MERGE_DUPLICATES_V3_RULES, casefolded)
