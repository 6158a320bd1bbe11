"""Shared command helpers."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer

from exrec.core.catalog import CatalogLoadError, load_catalog
from exrec.core.config import options_from_config
from exrec.core.models import RecommendOptions, UserProfile
from exrec.core.state import CLIState
from exrec.utils.parsing import ProfileError, load_profile_input, merge_profile_flags


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def fail(state: CLIState, message: str, code: int = 1) -> NoReturn:
    """Report an error in the active output mode and exit."""
    if state.json_output:
        print_json_payload(state, {"status": "error", "error": message})
    else:
        typer.echo(message)
    raise typer.Exit(code=code)


def catalog_for_state(state: CLIState, source: Optional[str]) -> List[Dict[str, Any]]:
    """Load the catalog named on the command line, by env, or in config."""
    resolved = state.catalog_source(source)
    if not resolved:
        fail(state, "No catalog source: pass --catalog or set catalog.source in config.", code=2)

    catalog_cfg = state.config.get("catalog", {})
    try:
        return load_catalog(
            resolved,
            timeout_seconds=float(catalog_cfg.get("timeout_seconds", 30)),
            max_retries=int(catalog_cfg.get("max_retries", 3)),
        )
    except CatalogLoadError as exc:
        fail(state, f"Catalog error: {exc}")


def profile_for_state(
    state: CLIState,
    profile_path: Optional[Path],
    goals: Optional[List[str]] = None,
    areas: Optional[List[str]] = None,
    feels: Optional[List[str]] = None,
    equipment: Optional[List[str]] = None,
    avoid: Optional[List[str]] = None,
    intensity: Optional[str] = None,
    minutes: Optional[float] = None,
) -> UserProfile:
    """Build a profile from ``--profile`` (file or ``-`` for stdin) overlaid with flags."""
    read_stdin = profile_path is not None and str(profile_path) == "-"
    try:
        raw = load_profile_input(
            file_path=None if read_stdin else profile_path,
            read_stdin=read_stdin,
            stdin_text=sys.stdin.read() if read_stdin else "",
        )
    except (OSError, ProfileError) as exc:
        fail(state, f"Profile error: {exc}")

    merged = merge_profile_flags(
        raw,
        goals=goals,
        areas=areas,
        feels=feels,
        equipment=equipment,
        avoid=avoid,
        intensity=intensity,
        minutes=minutes,
    )
    return UserProfile.from_dict(merged)


def options_for_state(
    state: CLIState,
    max_results: Optional[int] = None,
    max_per_pattern: Optional[int] = None,
    allow_trend_overlay: Optional[bool] = None,
) -> RecommendOptions:
    try:
        return options_from_config(
            state.config,
            max_results=max_results,
            max_per_pattern=max_per_pattern,
            allow_trend_overlay=allow_trend_overlay,
        )
    except (TypeError, ValueError) as exc:
        fail(state, f"Invalid options: {exc}", code=2)
