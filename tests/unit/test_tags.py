from __future__ import annotations

from exrec.core.tags import (
    exercise_intensity,
    exercise_label,
    intensity_rank,
    label_list,
    overlap,
    primary_pattern,
    tag_label,
    tag_set,
)


def test_tag_set_missing_field_is_empty() -> None:
    assert tag_set({}, "tag_goal") == frozenset()


def test_tag_set_scalar_is_treated_as_empty() -> None:
    assert tag_set({"tag_goal": "mobility"}, "tag_goal") == frozenset()
    assert tag_set({"tag_goal": 3}, "tag_goal") == frozenset()
    assert tag_set({"tag_goal": None}, "tag_goal") == frozenset()


def test_label_list_drops_non_strings_and_keeps_order() -> None:
    assert label_list(["b", 1, None, "a"]) == ["b", "a"]


def test_overlap_counts_distinct_labels() -> None:
    assert overlap(["a", "b", "c"], frozenset({"b", "c", "d"})) == 2
    assert overlap([], frozenset({"a"})) == 0


def test_intensity_rank_defaults_to_medium() -> None:
    assert intensity_rank("low") == 1
    assert intensity_rank("high") == 3
    assert intensity_rank(None) == 2
    assert intensity_rank("extreme") == 2


def test_exercise_intensity_ignores_non_string() -> None:
    assert exercise_intensity({"tag_intensity": 3}) == 2
    assert exercise_intensity({"tag_intensity": "high"}) == 3


def test_primary_pattern_uses_first_or_general() -> None:
    assert primary_pattern({"tag_pattern": ["press", "push"]}) == "press"
    assert primary_pattern({"tag_pattern": []}) == "general"
    assert primary_pattern({}) == "general"
    assert primary_pattern({"tag_pattern": "press"}) == "general"


def test_tag_label_requires_non_empty_string() -> None:
    assert tag_label({"tag_time_cost": "short"}, "tag_time_cost") == "short"
    assert tag_label({"tag_time_cost": ""}, "tag_time_cost") is None
    assert tag_label({"tag_time_cost": ["short"]}, "tag_time_cost") is None


def test_exercise_label_fallbacks() -> None:
    assert exercise_label({"name": "Wall Slide", "id": "ws"}) == "Wall Slide"
    assert exercise_label({"id": "ws"}) == "ws"
    assert exercise_label({}) == "Untitled"
