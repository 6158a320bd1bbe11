"""Parsing helpers for profile input from files, stdin and CLI flags."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml


class ProfileError(ValueError):
    """Raised when profile input cannot be parsed into an object."""


def split_labels(values: Optional[Sequence[str]]) -> List[str]:
    """Flatten repeated and comma-separated label options, dropping blanks and duplicates."""
    labels: List[str] = []
    for value in values or []:
        for part in value.split(","):
            label = part.strip().lower()
            if label and label not in labels:
                labels.append(label)
    return labels


def _parse_profile_text(text: str, yaml_first: bool) -> Any:
    if yaml_first:
        return yaml.safe_load(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def load_profile_input(
    file_path: Optional[Path],
    read_stdin: bool,
    stdin_text: str = "",
) -> Dict[str, Any]:
    """Load a profile object from a JSON/YAML file or stdin text."""
    if file_path:
        try:
            text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ProfileError(f"Could not read profile from {file_path}: {exc}") from exc
        yaml_first = file_path.suffix.lower() in {".yaml", ".yml"}
        source = str(file_path)
    elif read_stdin:
        text = stdin_text
        yaml_first = False
        source = "stdin"
    else:
        return {}

    if not text.strip():
        return {}

    try:
        raw_data = _parse_profile_text(text, yaml_first)
    except yaml.YAMLError as exc:
        raise ProfileError(f"Could not parse profile from {source}: {exc}") from exc

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ProfileError(f"Profile in {source} must be an object")
    return raw_data


def merge_profile_flags(
    profile: Dict[str, Any],
    goals: Optional[Sequence[str]] = None,
    areas: Optional[Sequence[str]] = None,
    feels: Optional[Sequence[str]] = None,
    equipment: Optional[Sequence[str]] = None,
    avoid: Optional[Sequence[str]] = None,
    intensity: Optional[str] = None,
    minutes: Optional[float] = None,
) -> Dict[str, Any]:
    """Overlay CLI flag values on a loaded profile; flags that were not given keep file values."""
    merged = dict(profile)
    for key, values in (
        ("goals", goals),
        ("areas", areas),
        ("feels", feels),
        ("equipment", equipment),
        ("avoid", avoid),
    ):
        labels = split_labels(values)
        if labels:
            merged[key] = labels
    if intensity:
        merged["intensity"] = intensity.strip().lower()
    if minutes is not None:
        merged["timeMinutes"] = minutes
    return merged
