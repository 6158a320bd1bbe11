"""Diversity-capped greedy selection over ranked exercises."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

from exrec.core.constants import (
    DEFAULT_MAX_RESULTS,
    EARLY_STOP_MIN_PICKS,
    LONG_SESSION_MAX_RESULTS,
    MAX_RESULTS_BY_MINUTES,
)
from exrec.core.models import Exercise, ScoredExercise
from exrec.core.tags import primary_pattern


def default_max_results(time_minutes: Optional[float]) -> int:
    """Result count for a session length; no (or zero) time means the default of 5."""
    if not time_minutes:
        return DEFAULT_MAX_RESULTS
    for upper, count in MAX_RESULTS_BY_MINUTES:
        if time_minutes <= upper:
            return count
    return LONG_SESSION_MAX_RESULTS


def select_diverse(
    ranked: Sequence[ScoredExercise],
    max_results: int,
    max_per_pattern: int,
) -> List[Exercise]:
    """Pick top-scoring exercises, allowing at most ``max_per_pattern`` per primary pattern.

    Candidates over the pattern cap are skipped without using a slot. Once
    ``min(3, max_results)`` picks exist, the first non-positive score that
    would otherwise be accepted ends the scan.
    """
    picks: List[Exercise] = []
    pattern_counts: Counter = Counter()
    early_stop_at = min(EARLY_STOP_MIN_PICKS, max_results)

    for candidate in ranked:
        key = primary_pattern(candidate.exercise)
        if pattern_counts[key] >= max_per_pattern:
            continue
        if candidate.score <= 0 and len(picks) >= early_stop_at:
            break

        picks.append(candidate.exercise)
        pattern_counts[key] += 1
        if len(picks) >= max_results:
            break

    return picks
