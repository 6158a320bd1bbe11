"""Recommendation commands."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from exrec.commands.common import (
    catalog_for_state,
    fail,
    get_state,
    options_for_state,
    print_json_payload,
    profile_for_state,
)
from exrec.core.constants import SCORE_RULE_LABELS
from exrec.core.models import Recommendation
from exrec.core.recommender import explain
from exrec.core.state import CLIState
from exrec.core.tags import exercise_label, primary_pattern, tag_label, tag_set
from exrec.exporters.json_export import recommendation_payload, write_json
from exrec.exporters.markdown import write_recommendation_markdown
from exrec.utils.formatting import format_breakdown, format_intensity, format_labels, format_score
from exrec.utils.text import export_filename

CatalogOption = typer.Option(None, "--catalog", "-c", help="Catalog URL or JSON/YAML file")
ProfileOption = typer.Option(None, "--profile", "-p", help="Profile JSON/YAML file, or - for stdin")
GoalOption = typer.Option(None, "--goal", help="Goal label (repeatable or comma-separated)")
AreaOption = typer.Option(None, "--area", help="Body area label (repeatable or comma-separated)")
FeelOption = typer.Option(None, "--feel", help="Sensation label (repeatable or comma-separated)")
EquipmentOption = typer.Option(None, "--equipment", help="Available equipment (repeatable or comma-separated)")
AvoidOption = typer.Option(None, "--avoid", help="Contraindication to avoid (repeatable or comma-separated)")
IntensityOption = typer.Option(None, "--intensity", help="Intensity: low|medium|high")
MinutesOption = typer.Option(None, "--minutes", min=0, help="Session length in minutes")


def _validate_intensity(state: CLIState, intensity: Optional[str]) -> None:
    if intensity and intensity.strip().lower() not in {"low", "medium", "high"}:
        fail(state, "--intensity must be one of: low, medium, high", code=2)


def _score_lookup(result: Recommendation) -> Dict[int, float]:
    return {id(item.exercise): item.score for item in result.ranked}


def _export(
    state: CLIState,
    result: Recommendation,
    output: Optional[Path],
    export_format: Optional[str],
    title: str,
) -> Optional[Path]:
    """Write the result to ``--output`` or, for ``--export`` alone, the configured directory.

    A directory given to ``--output`` receives a file named after the title.
    """
    if output is None and export_format is None:
        return None

    if output is None or output.is_dir():
        try:
            filename = export_filename(title, export_format or "md")
        except ValueError as exc:
            fail(state, str(exc), code=2)
        output = state.export_dir(output) / filename

    if output.suffix.lower() == ".md":
        return write_recommendation_markdown(output.parent, result, title=title, filename=output.name)
    return write_json(output, recommendation_payload(result))


def recommend_command(
    ctx: typer.Context,
    catalog: Optional[str] = CatalogOption,
    profile: Optional[Path] = ProfileOption,
    goal: Optional[List[str]] = GoalOption,
    area: Optional[List[str]] = AreaOption,
    feel: Optional[List[str]] = FeelOption,
    equipment: Optional[List[str]] = EquipmentOption,
    avoid: Optional[List[str]] = AvoidOption,
    intensity: Optional[str] = IntensityOption,
    minutes: Optional[float] = MinutesOption,
    max_results: Optional[int] = typer.Option(None, min=1, help="Maximum exercises to return"),
    max_per_pattern: Optional[int] = typer.Option(None, min=1, help="Maximum exercises per movement pattern"),
    trend: Optional[bool] = typer.Option(None, "--trend/--no-trend", help="Allow the trend overlay"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export to a .json or .md file, or into a directory"),
    export_format: Optional[str] = typer.Option(
        None, "--export", help="Export format (json|md), named after --title"
    ),
    title: str = typer.Option("Recommended Session", help="Title used for markdown export"),
) -> None:
    """Recommend exercises for a profile."""
    state = get_state(ctx)
    _validate_intensity(state, intensity)

    user = profile_for_state(
        state,
        profile,
        goals=goal,
        areas=area,
        feels=feel,
        equipment=equipment,
        avoid=avoid,
        intensity=intensity,
        minutes=minutes,
    )
    options = options_for_state(
        state,
        max_results=max_results,
        max_per_pattern=max_per_pattern,
        allow_trend_overlay=trend,
    )
    exercises = catalog_for_state(state, catalog)
    result = explain(user, exercises, options)

    out_path = _export(state, result, output, export_format, title)

    if state.json_output:
        payload = recommendation_payload(result)
        payload["exports"] = {"file": str(out_path) if out_path else None}
        print_json_payload(state, payload)
        return

    scores = _score_lookup(result)

    if state.plain_output:
        typer.echo("rank\tid\tname\tpattern\tintensity\ttime\tscore")
        for index, exercise in enumerate(result.picks, 1):
            typer.echo(
                "\t".join(
                    [
                        str(index),
                        str(exercise.get("id", "")),
                        exercise_label(exercise),
                        primary_pattern(exercise),
                        tag_label(exercise, "tag_intensity") or "medium",
                        tag_label(exercise, "tag_time_cost") or "-",
                        format_score(scores.get(id(exercise), 0.0)),
                    ]
                )
            )
        typer.echo(f"total\t{len(result.picks)}")
        if out_path:
            typer.echo(f"output\t{out_path}")
        return

    table = Table(title=f"Recommended exercises ({len(result.picks)})")
    table.add_column("#", justify="right")
    table.add_column("Exercise")
    table.add_column("Pattern")
    table.add_column("Intensity")
    table.add_column("Goals")
    table.add_column("Areas")
    table.add_column("Score", justify="right")

    for index, exercise in enumerate(result.picks, 1):
        name = exercise_label(exercise)
        if exercise is result.trend_added:
            name = f"{name} [trend]"
        table.add_row(
            str(index),
            name,
            primary_pattern(exercise),
            format_intensity(exercise),
            format_labels(exercise.get("tag_goal")),
            format_labels(exercise.get("tag_area")),
            format_score(scores.get(id(exercise), 0.0)),
        )

    state.console.print(table)
    state.console.print(
        f"Picked {len(result.picks)} of {len(result.ranked)} eligible exercises "
        f"({len(result.excluded)} excluded)"
    )
    if out_path:
        state.console.print(f"Exported to: {out_path}")


def explain_command(
    ctx: typer.Context,
    catalog: Optional[str] = CatalogOption,
    profile: Optional[Path] = ProfileOption,
    goal: Optional[List[str]] = GoalOption,
    area: Optional[List[str]] = AreaOption,
    feel: Optional[List[str]] = FeelOption,
    equipment: Optional[List[str]] = EquipmentOption,
    avoid: Optional[List[str]] = AvoidOption,
    intensity: Optional[str] = IntensityOption,
    minutes: Optional[float] = MinutesOption,
    max_results: Optional[int] = typer.Option(None, min=1, help="Maximum exercises to return"),
    max_per_pattern: Optional[int] = typer.Option(None, min=1, help="Maximum exercises per movement pattern"),
    trend: Optional[bool] = typer.Option(None, "--trend/--no-trend", help="Allow the trend overlay"),
) -> None:
    """Show how every exercise was filtered and scored."""
    state = get_state(ctx)
    _validate_intensity(state, intensity)

    user = profile_for_state(
        state,
        profile,
        goals=goal,
        areas=area,
        feels=feel,
        equipment=equipment,
        avoid=avoid,
        intensity=intensity,
        minutes=minutes,
    )
    options = options_for_state(
        state,
        max_results=max_results,
        max_per_pattern=max_per_pattern,
        allow_trend_overlay=trend,
    )
    result = explain(user, catalog_for_state(state, catalog), options)
    picked = {id(exercise) for exercise in result.picks}

    if state.json_output:
        print_json_payload(state, recommendation_payload(result, include_ranking=True))
        return

    if state.plain_output:
        typer.echo("id\tname\tpattern\tscore\tpicked\tbreakdown")
        for item in result.ranked:
            typer.echo(
                "\t".join(
                    [
                        str(item.exercise.get("id", "")),
                        exercise_label(item.exercise),
                        primary_pattern(item.exercise),
                        format_score(item.score),
                        "yes" if id(item.exercise) in picked else "no",
                        format_breakdown(item.breakdown),
                    ]
                )
            )
        for excluded in result.excluded:
            typer.echo(f"excluded\t{excluded.exercise.get('id', '')}\t{excluded.reason}")
        return

    table = Table(title=f"Scored exercises ({len(result.ranked)} eligible)")
    table.add_column("Exercise")
    table.add_column("Pattern")
    table.add_column("Score", justify="right")
    table.add_column("Picked")
    for name in SCORE_RULE_LABELS.values():
        table.add_column(name, justify="right")

    for item in result.ranked:
        values = dict(item.breakdown)
        table.add_row(
            exercise_label(item.exercise),
            primary_pattern(item.exercise),
            format_score(item.score),
            "yes" if id(item.exercise) in picked else "",
            *[f"{values.get(rule, 0.0):g}" for rule in SCORE_RULE_LABELS],
        )
    state.console.print(table)

    if result.excluded:
        excluded_table = Table(title=f"Excluded exercises ({len(result.excluded)})")
        excluded_table.add_column("Exercise")
        excluded_table.add_column("Gate")
        for excluded in result.excluded:
            excluded_table.add_row(exercise_label(excluded.exercise), excluded.reason)
        state.console.print(excluded_table)


def _catalog_summary(exercises: List[Dict[str, Any]]) -> Dict[str, Any]:
    by_intensity = Counter()
    by_pattern = Counter()
    by_goal = Counter()
    for exercise in exercises:
        by_intensity[tag_label(exercise, "tag_intensity") or "medium"] += 1
        by_pattern[primary_pattern(exercise)] += 1
        for goal in tag_set(exercise, "tag_goal"):
            by_goal[goal] += 1

    return {
        "total": len(exercises),
        "by_intensity": dict(by_intensity),
        "by_pattern": dict(by_pattern.most_common()),
        "by_goal": dict(by_goal.most_common()),
    }


def catalog_command(
    ctx: typer.Context,
    catalog: Optional[str] = CatalogOption,
) -> None:
    """Summarize a catalog by intensity, movement pattern and goal."""
    state = get_state(ctx)
    summary = _catalog_summary(catalog_for_state(state, catalog))

    if state.json_output:
        print_json_payload(state, summary)
        return

    if state.plain_output:
        typer.echo(f"total\t{summary['total']}")
        for section in ("by_intensity", "by_pattern", "by_goal"):
            for key, count in summary[section].items():
                typer.echo(f"{section[3:]}\t{key}\t{count}")
        return

    state.console.print(f"Catalog: {summary['total']} exercises")
    for section, heading in (
        ("by_intensity", "Intensity"),
        ("by_pattern", "Primary pattern"),
        ("by_goal", "Goal"),
    ):
        table = Table(title=heading)
        table.add_column(heading)
        table.add_column("Count", justify="right")
        for key, count in summary[section].items():
            table.add_row(str(key), str(count))
        state.console.print(table)
