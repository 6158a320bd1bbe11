"""Tolerant accessors for exercise tag fields."""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from exrec.core.constants import DEFAULT_INTENSITY, GENERAL_PATTERN, INTENSITY_RANK

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def label_list(raw: Any) -> List[str]:
    """Return string members of a list-like value, in order; anything else is empty."""
    if not isinstance(raw, _SEQUENCE_TYPES):
        return []
    return [item for item in raw if isinstance(item, str)]


def label_set(raw: Any) -> FrozenSet[str]:
    return frozenset(label_list(raw))


def tag_set(exercise: Mapping[str, Any], field: str) -> FrozenSet[str]:
    """Read a set-valued tag, treating absent or malformed values as empty."""
    return label_set(exercise.get(field))


def tag_label(exercise: Mapping[str, Any], field: str) -> Optional[str]:
    value = exercise.get(field)
    return value if isinstance(value, str) and value else None


def overlap(tags: Iterable[str], wanted: FrozenSet[str]) -> int:
    """Size of the intersection between an exercise's tags and a profile set."""
    return len(frozenset(tags) & wanted)


def intensity_rank(label: Optional[str]) -> int:
    """Ordinal value of an intensity label; unknown labels rank as medium."""
    return INTENSITY_RANK.get(label or DEFAULT_INTENSITY, INTENSITY_RANK[DEFAULT_INTENSITY])


def exercise_intensity(exercise: Mapping[str, Any]) -> int:
    return intensity_rank(tag_label(exercise, "tag_intensity"))


def patterns(exercise: Mapping[str, Any]) -> List[str]:
    return label_list(exercise.get("tag_pattern"))


def primary_pattern(exercise: Mapping[str, Any]) -> str:
    """First movement pattern, or ``general`` when the exercise has none."""
    found = patterns(exercise)
    return found[0] if found else GENERAL_PATTERN


def exercise_label(exercise: Mapping[str, Any]) -> str:
    """Human-readable name for console output."""
    for key in ("name", "name_en", "title", "id"):
        value = exercise.get(key)
        if value not in (None, ""):
            return str(value)
    return "Untitled"
