"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from exrec.core.constants import INTENSITY_LABELS
from exrec.core.tags import label_list, tag_label


def format_labels(values: Any, empty: str = "-") -> str:
    """Join a tag list for display."""
    labels = label_list(values) if not isinstance(values, str) else [values]
    return ", ".join(labels) if labels else empty


def format_score(score: float) -> str:
    return f"{score:.1f}"


def format_minutes(minutes: Optional[float]) -> str:
    if minutes is None:
        return "N/A"
    value = float(minutes)
    return f"{value:.0f} min" if value.is_integer() else f"{value:.1f} min"


def format_intensity(exercise: Any) -> str:
    label = tag_label(exercise, "tag_intensity") or "medium"
    return INTENSITY_LABELS.get(label, label)


def format_breakdown(parts: Iterable[tuple]) -> str:
    """Render non-zero score contributions as ``name+value`` pairs."""
    rendered = [f"{name}+{value:g}" for name, value in parts if value]
    return " ".join(rendered) if rendered else "-"
