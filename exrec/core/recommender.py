"""Recommendation pipeline: filter, score, rank, select, trend overlay."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from exrec.core.filters import partition_catalog
from exrec.core.models import Exercise, Recommendation, RecommendOptions, UserProfile
from exrec.core.scoring import rank_exercises
from exrec.core.selection import default_max_results, select_diverse
from exrec.core.trend import apply_trend_overlay

logger = logging.getLogger(__name__)

ProfileInput = Union[UserProfile, Mapping[str, Any]]


def _as_profile(profile: Optional[ProfileInput]) -> UserProfile:
    if isinstance(profile, UserProfile):
        return profile
    return UserProfile.from_dict(profile or {})


def explain(
    profile: Optional[ProfileInput],
    catalog: Sequence[Exercise],
    options: Optional[RecommendOptions] = None,
) -> Recommendation:
    """Run the full pipeline and keep every intermediate stage."""
    user = _as_profile(profile)
    opts = options or RecommendOptions()
    max_results = opts.max_results or default_max_results(user.time_minutes)

    eligible, excluded = partition_catalog(user, catalog)
    ranked = rank_exercises(user, eligible)
    selected = select_diverse(ranked, max_results=max_results, max_per_pattern=opts.max_per_pattern)
    picks = apply_trend_overlay(user, ranked, selected, allow=opts.allow_trend_overlay)
    trend = picks[-1] if len(picks) > len(selected) else None

    logger.debug(
        "catalog=%d eligible=%d excluded=%d picks=%d max_results=%d trend=%s",
        len(catalog),
        len(eligible),
        len(excluded),
        len(picks),
        max_results,
        trend is not None,
    )
    return Recommendation(
        profile=user,
        max_results=max_results,
        max_per_pattern=opts.max_per_pattern,
        picks=picks,
        ranked=ranked,
        excluded=excluded,
        trend_added=trend,
    )


def recommend(
    profile: Optional[ProfileInput],
    catalog: Sequence[Exercise],
    options: Optional[RecommendOptions] = None,
) -> List[Exercise]:
    """Return the recommended catalog records, best first.

    The result holds references into ``catalog``, at most ``max_results``
    of them plus one optional trend exercise.
    """
    return explain(profile, catalog, options).picks
