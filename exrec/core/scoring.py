"""Additive relevance scoring for eligible exercises.

Each rule is a separate function returning its contribution, so the total
is always the sum of ``score_breakdown`` in rule order.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

from exrec.core.constants import (
    AREA_WEIGHT,
    EQUIPMENT_WEIGHT,
    FEEL_WEIGHT,
    GOAL_WEIGHT,
    PATTERN_BONUS,
    SHORT_SESSION_MAX_MINUTES,
    SYNERGY_AREAS,
    SYNERGY_BONUS,
    SYNERGY_EXERCISE_GOALS,
    SYNERGY_GOAL,
    TIME_COST_BONUS,
)
from exrec.core.models import Exercise, ScoredExercise, UserProfile
from exrec.core.tags import overlap, patterns, tag_label, tag_set


def goal_score(profile: UserProfile, exercise: Exercise) -> float:
    if not profile.goals:
        return 0.0
    return GOAL_WEIGHT * overlap(tag_set(exercise, "tag_goal"), profile.goals)


def area_score(profile: UserProfile, exercise: Exercise) -> float:
    if not profile.areas:
        return 0.0
    return AREA_WEIGHT * overlap(tag_set(exercise, "tag_area"), profile.areas)


def feel_score(profile: UserProfile, exercise: Exercise) -> float:
    if not profile.feels:
        return 0.0
    return FEEL_WEIGHT * overlap(tag_set(exercise, "tag_feel"), profile.feels)


def desired_time_cost(time_minutes: float) -> str:
    return "short" if time_minutes <= SHORT_SESSION_MAX_MINUTES else "medium"


def time_cost_score(profile: UserProfile, exercise: Exercise) -> float:
    if profile.time_minutes is None:
        return 0.0
    if tag_label(exercise, "tag_time_cost") == desired_time_cost(profile.time_minutes):
        return TIME_COST_BONUS
    return 0.0


def equipment_score(profile: UserProfile, exercise: Exercise) -> float:
    """Soft preference for exercises that use what the user has."""
    if not profile.equipment:
        return 0.0
    return EQUIPMENT_WEIGHT * overlap(tag_set(exercise, "tag_equipment"), profile.equipment)


def synergy_score(profile: UserProfile, exercise: Exercise) -> float:
    """Nudge stability/posture work for strength goals around the shoulder and back."""
    if SYNERGY_GOAL not in profile.goals or not (profile.areas & SYNERGY_AREAS):
        return 0.0
    if tag_set(exercise, "tag_goal") & SYNERGY_EXERCISE_GOALS:
        return SYNERGY_BONUS
    return 0.0


def pattern_score(profile: UserProfile, exercise: Exercise) -> float:
    del profile
    return PATTERN_BONUS if patterns(exercise) else 0.0


SCORE_RULES: List[Tuple[str, Callable[[UserProfile, Exercise], float]]] = [
    ("goal", goal_score),
    ("area", area_score),
    ("feel", feel_score),
    ("time_cost", time_cost_score),
    ("equipment", equipment_score),
    ("synergy", synergy_score),
    ("pattern", pattern_score),
]


def score_breakdown(profile: UserProfile, exercise: Exercise) -> Tuple[Tuple[str, float], ...]:
    return tuple((name, rule(profile, exercise)) for name, rule in SCORE_RULES)


def score_exercise(profile: UserProfile, exercise: Exercise) -> float:
    """Total relevance score; higher is more relevant."""
    return sum(value for _, value in score_breakdown(profile, exercise))


def rank_exercises(profile: UserProfile, exercises: Iterable[Exercise]) -> List[ScoredExercise]:
    """Score and sort by descending score; equal scores keep their input order."""
    scored: List[ScoredExercise] = []
    for exercise in exercises:
        breakdown = score_breakdown(profile, exercise)
        total = sum(value for _, value in breakdown)
        scored.append(ScoredExercise(exercise=exercise, score=total, breakdown=breakdown))
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored
