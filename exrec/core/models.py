"""Lightweight data models shared by the recommender stages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from exrec.core.constants import DEFAULT_INTENSITY, DEFAULT_MAX_PER_PATTERN, INTENSITY_RANK
from exrec.core.tags import label_set

Exercise = Mapping[str, Any]


def _as_minutes(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError:
            return None
    if isinstance(raw, (int, float)):
        # nan and inf count as absent
        return raw if math.isfinite(raw) else None
    return None


def normalize_intensity(raw: Any) -> str:
    if isinstance(raw, str) and raw.strip().lower() in INTENSITY_RANK:
        return raw.strip().lower()
    return DEFAULT_INTENSITY


@dataclass(frozen=True)
class UserProfile:
    """What the user wants from a session and what they must avoid."""

    goals: FrozenSet[str] = frozenset()
    areas: FrozenSet[str] = frozenset()
    feels: FrozenSet[str] = frozenset()
    intensity: str = DEFAULT_INTENSITY
    time_minutes: Optional[float] = None
    equipment: FrozenSet[str] = frozenset()
    avoid: FrozenSet[str] = frozenset()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        """Build a profile from a loosely-typed mapping, defaulting malformed fields."""
        if not isinstance(data, Mapping):
            return cls()
        minutes = data.get("timeMinutes", data.get("time_minutes"))
        return cls(
            goals=label_set(data.get("goals")),
            areas=label_set(data.get("areas")),
            feels=label_set(data.get("feels")),
            intensity=normalize_intensity(data.get("intensity")),
            time_minutes=_as_minutes(minutes),
            equipment=label_set(data.get("equipment")),
            avoid=label_set(data.get("avoid")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goals": sorted(self.goals),
            "areas": sorted(self.areas),
            "feels": sorted(self.feels),
            "intensity": self.intensity,
            "timeMinutes": self.time_minutes,
            "equipment": sorted(self.equipment),
            "avoid": sorted(self.avoid),
        }


@dataclass(frozen=True)
class RecommendOptions:
    """Per-call tuning of the selection stage."""

    max_results: Optional[int] = None
    max_per_pattern: int = DEFAULT_MAX_PER_PATTERN
    allow_trend_overlay: bool = True

    def __post_init__(self) -> None:
        if self.max_results is not None and self.max_results < 1:
            raise ValueError(f"max_results must be a positive integer, got {self.max_results}")
        if self.max_per_pattern < 1:
            raise ValueError(f"max_per_pattern must be a positive integer, got {self.max_per_pattern}")


@dataclass(frozen=True)
class ScoredExercise:
    """An eligible exercise and its relevance score."""

    exercise: Exercise
    score: float
    breakdown: Tuple[Tuple[str, float], ...] = ()


@dataclass(frozen=True)
class ExcludedExercise:
    """An exercise removed by a hard filter gate."""

    exercise: Exercise
    reason: str


@dataclass
class Recommendation:
    """Full result of one pipeline run, with the intermediate stages kept."""

    profile: UserProfile
    max_results: int
    max_per_pattern: int
    picks: List[Exercise] = field(default_factory=list)
    ranked: List[ScoredExercise] = field(default_factory=list)
    excluded: List[ExcludedExercise] = field(default_factory=list)
    trend_added: Optional[Exercise] = None
