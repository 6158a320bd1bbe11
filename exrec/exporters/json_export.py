"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from exrec.core.models import Recommendation
from exrec.core.tags import primary_pattern


def recommendation_payload(result: Recommendation, include_ranking: bool = False) -> Dict[str, Any]:
    """Serializable view of a recommendation run."""
    payload: Dict[str, Any] = {
        "profile": result.profile.to_dict(),
        "options": {
            "max_results": result.max_results,
            "max_per_pattern": result.max_per_pattern,
        },
        "exercises": [dict(exercise) for exercise in result.picks],
        "summary": {
            "total": len(result.picks),
            "eligible": len(result.ranked),
            "excluded": len(result.excluded),
            "trend_added": result.trend_added is not None,
        },
    }
    if include_ranking:
        payload["ranking"] = [
            {
                "id": item.exercise.get("id"),
                "score": round(item.score, 4),
                "pattern": primary_pattern(item.exercise),
                "breakdown": {name: value for name, value in item.breakdown},
            }
            for item in result.ranked
        ]
        payload["excluded"] = [
            {"id": item.exercise.get("id"), "reason": item.reason} for item in result.excluded
        ]
    return payload


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n")
    return path
