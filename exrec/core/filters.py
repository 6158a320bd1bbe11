"""Hard eligibility gates applied before scoring."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from exrec.core.constants import NO_EQUIPMENT
from exrec.core.models import ExcludedExercise, Exercise, UserProfile
from exrec.core.tags import exercise_intensity, intensity_rank, tag_set


def equipment_ok(profile: UserProfile, exercise: Exercise) -> bool:
    """Every required item except ``none`` must be available, if the user listed any."""
    if not profile.equipment:
        return True
    required = tag_set(exercise, "tag_equipment") - {NO_EQUIPMENT}
    return required <= profile.equipment


def contraindication_ok(profile: UserProfile, exercise: Exercise) -> bool:
    if not profile.avoid:
        return True
    return not (tag_set(exercise, "tag_contra") & profile.avoid)


def intensity_ok(profile: UserProfile, exercise: Exercise) -> bool:
    return exercise_intensity(exercise) <= intensity_rank(profile.intensity)


_GATES = (
    ("equipment", equipment_ok),
    ("contraindication", contraindication_ok),
    ("intensity", intensity_ok),
)


def exclusion_reason(profile: UserProfile, exercise: Exercise) -> Optional[str]:
    """Name of the first gate that rejects the exercise, or None if it passes."""
    for name, gate in _GATES:
        if not gate(profile, exercise):
            return name
    return None


def partition_catalog(
    profile: UserProfile,
    catalog: Iterable[Exercise],
) -> Tuple[List[Exercise], List[ExcludedExercise]]:
    """Split the catalog into eligible records and excluded ones, keeping catalog order."""
    eligible: List[Exercise] = []
    excluded: List[ExcludedExercise] = []
    for exercise in catalog:
        reason = exclusion_reason(profile, exercise)
        if reason is None:
            eligible.append(exercise)
        else:
            excluded.append(ExcludedExercise(exercise=exercise, reason=reason))
    return eligible, excluded


def filter_catalog(profile: UserProfile, catalog: Iterable[Exercise]) -> List[Exercise]:
    eligible, _ = partition_catalog(profile, catalog)
    return eligible
