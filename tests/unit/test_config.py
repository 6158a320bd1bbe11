from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from exrec.core.config import (
    ConfigError,
    _deep_merge,
    default_config_path,
    expand_path,
    load_config,
    options_from_config,
    resolve_catalog_source,
    resolve_output_dir,
    save_config,
)


def test_deep_merge_nested_dicts() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 3}
    override = {"a": {"b": 9}, "y": 4}
    merged = _deep_merge(base, override)
    assert merged == {"a": {"b": 9, "c": 2}, "x": 3, "y": 4}
    assert base["a"]["b"] == 1


def test_expand_path_expands_home_and_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("EXREC_TMP_PATH", str(tmp_path))
    expanded = expand_path("$EXREC_TMP_PATH/config.toml")
    assert expanded == (tmp_path / "config.toml").resolve()


def test_default_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("EXREC_CONFIG_FILE", str(path))
    assert default_config_path() == path.resolve()


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg["recommend"]["max_per_pattern"] == 2
    assert cfg["recommend"]["allow_trend_overlay"] is True
    assert cfg["catalog"]["max_retries"] == 3


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"recommend": {"max_per_pattern": 1}, "catalog": {"source": "ex.json"}}))
    cfg = load_config(path)
    assert cfg["recommend"]["max_per_pattern"] == 1
    assert cfg["recommend"]["allow_trend_overlay"] is True
    assert cfg["catalog"]["source"] == "ex.json"


def test_load_config_from_toml(write_temp_toml) -> None:
    path = write_temp_toml(
        "config.toml",
        """
[catalog]
source = "https://example.com/exercises.json"

[recommend]
allow_trend_overlay = false
""",
    )
    cfg = load_config(path)
    assert cfg["catalog"]["source"] == "https://example.com/exercises.json"
    assert cfg["recommend"]["allow_trend_overlay"] is False


def test_load_config_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{broken")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_invalid_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("[recommend\nmax_per_pattern = 3")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_non_table_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="object/table"):
        load_config(path)


def test_save_config_json(tmp_path: Path) -> None:
    payload: Dict[str, Any] = {"recommend": {"max_per_pattern": 3}}
    path = save_config(payload, tmp_path / "config.json")
    assert json.loads(path.read_text())["recommend"]["max_per_pattern"] == 3


def test_save_config_toml_and_reload(tmp_path: Path) -> None:
    payload: Dict[str, Any] = {
        "catalog": {"source": "C:\\data\\ex.json", "max_retries": 5},
        "recommend": {"allow_trend_overlay": False},
    }
    path = save_config(payload, tmp_path / "nested" / "config.toml")
    cfg = load_config(path)
    assert cfg["catalog"]["source"] == "C:\\data\\ex.json"
    assert cfg["catalog"]["max_retries"] == 5
    assert cfg["recommend"]["allow_trend_overlay"] is False


def test_resolve_catalog_source_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = {"catalog": {"source": "from-config.json"}}
    monkeypatch.delenv("EXREC_CATALOG", raising=False)
    assert resolve_catalog_source(cfg) == "from-config.json"
    monkeypatch.setenv("EXREC_CATALOG", "from-env.json")
    assert resolve_catalog_source(cfg) == "from-env.json"
    assert resolve_catalog_source(cfg, explicit="explicit.json") == "explicit.json"


def test_resolve_catalog_source_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXREC_CATALOG", raising=False)
    assert resolve_catalog_source({"catalog": {"source": ""}}) is None


def test_resolve_output_dir_prefers_explicit(tmp_path: Path) -> None:
    explicit = tmp_path / "exports"
    cfg = {"output": {"default_directory": "/tmp/ignored"}}
    assert resolve_output_dir(cfg, explicit=explicit) == explicit.resolve()


def test_resolve_output_dir_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("EXREC_OUTPUT_DIR", str(tmp_path / "from-env"))
    cfg = {"output": {"default_directory": "/tmp/ignored"}}
    assert resolve_output_dir(cfg) == (tmp_path / "from-env").resolve()


def test_options_from_config_defaults(tmp_path: Path) -> None:
    options = options_from_config(load_config(tmp_path / "missing.toml"))
    assert options.max_results is None
    assert options.max_per_pattern == 2
    assert options.allow_trend_overlay is True


def test_options_from_config_explicit_values_win() -> None:
    cfg = {"recommend": {"max_results": 4, "max_per_pattern": 3, "allow_trend_overlay": True}}
    assert options_from_config(cfg).max_results == 4
    options = options_from_config(cfg, max_results=2, max_per_pattern=1, allow_trend_overlay=False)
    assert options.max_results == 2
    assert options.max_per_pattern == 1
    assert options.allow_trend_overlay is False


def test_options_from_config_rejects_invalid_cap() -> None:
    with pytest.raises(ValueError):
        options_from_config({"recommend": {"max_per_pattern": 0}})


def test_save_config_writes_one_table_per_section(tmp_path: Path) -> None:
    path = save_config(
        {"catalog": {"source": "ex.json", "timeout_seconds": 30}, "output": {"default_directory": "out"}},
        tmp_path / "config.toml",
    )
    assert path.read_text() == (
        '[catalog]\nsource = "ex.json"\ntimeout_seconds = 30\n\n[output]\ndefault_directory = "out"\n'
    )


def test_save_config_rejects_unsupported_values(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        save_config({"recommend": {"max_results": [1, 2]}}, tmp_path / "config.toml")
    with pytest.raises(TypeError):
        save_config({"source": "ex.json"}, tmp_path / "flat.toml")
