"""Static constants and mappings for the exercise recommender."""

from __future__ import annotations

INTENSITY_RANK = {"low": 1, "medium": 2, "high": 3}
DEFAULT_INTENSITY = "medium"

NO_EQUIPMENT = "none"
GENERAL_PATTERN = "general"
TREND_GOAL = "trend"

GOAL_WEIGHT = 3.0
AREA_WEIGHT = 2.0
FEEL_WEIGHT = 2.0
TIME_COST_BONUS = 1.0
EQUIPMENT_WEIGHT = 1.0
SYNERGY_BONUS = 0.5
PATTERN_BONUS = 0.1

# Sessions up to this many minutes prefer "short" exercises.
SHORT_SESSION_MAX_MINUTES = 12

SYNERGY_GOAL = "strength"
SYNERGY_AREAS = frozenset({"shoulder", "thoracic", "lowback_core"})
SYNERGY_EXERCISE_GOALS = frozenset({"stability", "posture"})

DEFAULT_MAX_RESULTS = 5
DEFAULT_MAX_PER_PATTERN = 2
# (upper bound in minutes, result count); anything longer gets LONG_SESSION_MAX_RESULTS.
MAX_RESULTS_BY_MINUTES = [(5, 3), (10, 5), (20, 7)]
LONG_SESSION_MAX_RESULTS = 9

# Picks accepted before non-positive scores end the scan.
EARLY_STOP_MIN_PICKS = 3

INTENSITY_LABELS = {"low": "Low", "medium": "Medium", "high": "High"}

SCORE_RULE_LABELS = {
    "goal": "Goal overlap",
    "area": "Area overlap",
    "feel": "Feel overlap",
    "time_cost": "Time cost",
    "equipment": "Equipment overlap",
    "synergy": "Strength/posture synergy",
    "pattern": "Pattern present",
}
