"""Markdown export of a recommended session."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from exrec.core.models import Recommendation
from exrec.core.tags import exercise_label, primary_pattern
from exrec.utils.formatting import format_intensity, format_labels, format_minutes, format_score
from exrec.utils.text import export_filename


def recommendation_to_markdown(result: Recommendation, title: str = "Recommended Session") -> str:
    """Convert a recommendation to markdown with frontmatter."""
    profile = result.profile
    scores: Dict[int, float] = {id(item.exercise): item.score for item in result.ranked}
    title_yaml = title.replace('"', '\\"')

    rows: List[str] = [
        "| # | Exercise | Pattern | Intensity | Time | Score |",
        "|---|----------|---------|-----------|------|-------|",
    ]
    for index, exercise in enumerate(result.picks, 1):
        name = exercise_label(exercise)
        if exercise is result.trend_added:
            name = f"{name} _(trend)_"
        rows.append(
            f"| {index} | {name} | {primary_pattern(exercise)} | {format_intensity(exercise)} "
            f"| {exercise.get('tag_time_cost') or '-'} | {format_score(scores.get(id(exercise), 0.0))} |"
        )

    details: List[str] = []
    for exercise in result.picks:
        details.append(f"### {exercise_label(exercise)}")
        details.append(f"- **Goals:** {format_labels(exercise.get('tag_goal'))}")
        details.append(f"- **Areas:** {format_labels(exercise.get('tag_area'))}")
        details.append(f"- **Equipment:** {format_labels(exercise.get('tag_equipment'))}")
        description = exercise.get("description")
        if description:
            details.append("")
            details.append(str(description))
        details.append("")

    return (
        f"---\n"
        f"title: \"{title_yaml}\"\n"
        f"intensity: \"{profile.intensity}\"\n"
        f"exercises: {len(result.picks)}\n"
        f"max_results: {result.max_results}\n"
        f"---\n\n"
        f"# {title}\n\n"
        f"- **Goals:** {format_labels(sorted(profile.goals))}\n"
        f"- **Areas:** {format_labels(sorted(profile.areas))}\n"
        f"- **Feels:** {format_labels(sorted(profile.feels))}\n"
        f"- **Time:** {format_minutes(profile.time_minutes)}\n"
        f"- **Equipment:** {format_labels(sorted(profile.equipment), empty='any')}\n"
        f"- **Avoid:** {format_labels(sorted(profile.avoid))}\n\n"
        f"## Exercises\n"
        + "\n".join(rows)
        + "\n\n## Details\n\n"
        + ("\n".join(details) if details else "No exercises matched this profile.\n")
    )


def write_recommendation_markdown(
    output_dir: Path,
    result: Recommendation,
    title: str = "Recommended Session",
    filename: Optional[str] = None,
) -> Path:
    """Write a recommendation markdown file and return output path."""
    out_path = output_dir / (filename or export_filename(title, "md"))
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(recommendation_to_markdown(result, title=title))
    return out_path
