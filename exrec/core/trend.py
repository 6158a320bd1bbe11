"""Optional insertion of one "trend" exercise after selection."""

from __future__ import annotations

from typing import List, Optional, Sequence

from exrec.core.constants import TREND_GOAL
from exrec.core.models import Exercise, ScoredExercise, UserProfile
from exrec.core.tags import overlap, tag_set


def is_trend(exercise: Exercise) -> bool:
    return TREND_GOAL in tag_set(exercise, "tag_goal")


def trend_relevant(profile: UserProfile, exercise: Exercise) -> bool:
    """Relevant by goal or by area; an empty profile field counts as a match."""
    goal_ok = overlap(tag_set(exercise, "tag_goal"), profile.goals) > 0 if profile.goals else True
    area_ok = overlap(tag_set(exercise, "tag_area"), profile.areas) > 0 if profile.areas else True
    return goal_ok or area_ok


def find_trend_candidate(
    profile: UserProfile,
    ranked: Sequence[ScoredExercise],
    picks: Sequence[Exercise],
    allow: bool = True,
) -> Optional[Exercise]:
    """Return the exercise the overlay would add, or None when it does not fire."""
    if not allow or profile.intensity == "low":
        return None
    if any(is_trend(pick) for pick in picks):
        return None
    for candidate in ranked:
        if is_trend(candidate.exercise) and trend_relevant(profile, candidate.exercise):
            return candidate.exercise
    return None


def apply_trend_overlay(
    profile: UserProfile,
    ranked: Sequence[ScoredExercise],
    picks: Sequence[Exercise],
    allow: bool = True,
) -> List[Exercise]:
    """Return ``picks`` plus at most one trend exercise; inputs are left untouched."""
    result = list(picks)
    candidate = find_trend_candidate(profile, ranked, picks, allow=allow)
    if candidate is not None:
        result.append(candidate)
    return result
