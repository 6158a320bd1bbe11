"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from exrec.core.constants import DEFAULT_MAX_PER_PATTERN
from exrec.core.models import RecommendOptions


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("EXREC_CONFIG_FILE", "~/.config/exrec/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "catalog": {
            "source": "",
            "timeout_seconds": 30,
            "max_retries": 3,
        },
        "recommend": {
            # 0 means derive from the session length
            "max_results": 0,
            "max_per_pattern": DEFAULT_MAX_PER_PATTERN,
            "allow_trend_overlay": True,
        },
        "output": {
            "default_directory": "./recommendations",
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any]) -> str:
    """Render the two-level config layout: one TOML table per section."""
    blocks = []
    for section, values in data.items():
        if not isinstance(values, dict):
            raise TypeError(f"Config section {section!r} must be a table")
        lines = [f"[{section}]"]
        lines.extend(
            f"{key} = {_toml_literal(value)}" for key, value in values.items() if value is not None
        )
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def resolve_catalog_source(config: Dict[str, Any], explicit: Optional[str] = None) -> Optional[str]:
    """Resolve catalog URL or path with CLI override first, then env, then config."""
    raw = explicit or os.getenv("EXREC_CATALOG") or config.get("catalog", {}).get("source")
    return raw or None


def resolve_output_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Directory for exports named after the session title.

    Order: explicit directory, ``EXREC_OUTPUT_DIR``, ``output.default_directory``.
    """
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("EXREC_OUTPUT_DIR") or config.get("output", {}).get(
        "default_directory",
        "./recommendations",
    )
    return expand_path(raw)


def options_from_config(
    config: Dict[str, Any],
    max_results: Optional[int] = None,
    max_per_pattern: Optional[int] = None,
    allow_trend_overlay: Optional[bool] = None,
) -> RecommendOptions:
    """Build recommender options; explicit arguments win over config values."""
    section = config.get("recommend", {})
    configured_max = int(section.get("max_results") or 0)
    return RecommendOptions(
        max_results=max_results if max_results is not None else (configured_max or None),
        max_per_pattern=(
            max_per_pattern
            if max_per_pattern is not None
            else int(section.get("max_per_pattern", DEFAULT_MAX_PER_PATTERN))
        ),
        allow_trend_overlay=(
            allow_trend_overlay
            if allow_trend_overlay is not None
            else bool(section.get("allow_trend_overlay", True))
        ),
    )
