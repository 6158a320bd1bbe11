from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def make_exercise():
    def _make(ex_id: str, **tags: Any) -> Dict[str, Any]:
        record: Dict[str, Any] = {"id": ex_id, "name": ex_id.replace("_", " ").title()}
        record.update(tags)
        return record

    return _make


@pytest.fixture()
def sample_catalog() -> List[Dict[str, Any]]:
    return [
        {
            "id": "wall_angels",
            "name": "Wall Angels",
            "tag_goal": ["mobility", "posture"],
            "tag_area": ["shoulder", "thoracic"],
            "tag_feel": ["stiff_tight"],
            "tag_intensity": "low",
            "tag_equipment": ["wall"],
            "tag_contra": [],
            "tag_time_cost": "short",
            "tag_pattern": ["reach"],
        },
        {
            "id": "band_pull_apart",
            "name": "Band Pull-Apart",
            "tag_goal": ["strength", "posture"],
            "tag_area": ["shoulder"],
            "tag_feel": ["weak"],
            "tag_intensity": "medium",
            "tag_equipment": ["band"],
            "tag_contra": [],
            "tag_time_cost": "short",
            "tag_pattern": ["pull"],
        },
        {
            "id": "quadruped_rock",
            "name": "Quadruped Rock Back",
            "tag_goal": ["mobility"],
            "tag_area": ["hip", "lowback_core"],
            "tag_feel": ["stiff_tight"],
            "tag_intensity": "low",
            "tag_equipment": ["none"],
            "tag_contra": ["kneeling", "wrists_load"],
            "tag_time_cost": "short",
            "tag_pattern": ["hinge"],
        },
        {
            "id": "goblet_squat",
            "name": "Goblet Squat",
            "tag_goal": ["strength"],
            "tag_area": ["knee", "hip"],
            "tag_feel": [],
            "tag_intensity": "high",
            "tag_equipment": ["dumbbell"],
            "tag_contra": [],
            "tag_time_cost": "medium",
            "tag_pattern": ["squat"],
        },
        {
            "id": "dead_bug",
            "name": "Dead Bug",
            "tag_goal": ["stability"],
            "tag_area": ["lowback_core"],
            "tag_feel": ["unstable"],
            "tag_intensity": "low",
            "tag_equipment": ["none"],
            "tag_contra": [],
            "tag_time_cost": "short",
            "tag_pattern": ["anti_extension"],
        },
        {
            "id": "animal_flow_crab",
            "name": "Animal Flow Crab Reach",
            "tag_goal": ["trend", "mobility"],
            "tag_area": ["shoulder", "hip"],
            "tag_feel": [],
            "tag_intensity": "medium",
            "tag_equipment": ["none"],
            "tag_contra": ["wrists_load"],
            "tag_time_cost": "medium",
            "tag_pattern": ["crawl"],
        },
    ]


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("EXREC_CONFIG_FILE", str(tmp_path / "exrec-config.toml"))
    monkeypatch.delenv("EXREC_CATALOG", raising=False)
    monkeypatch.delenv("EXREC_OUTPUT_DIR", raising=False)
