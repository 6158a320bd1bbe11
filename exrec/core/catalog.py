"""Catalog loading from HTTP(S) URLs or local JSON/YAML files."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Union

import requests
import yaml

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class CatalogLoadError(RuntimeError):
    """Raised when a catalog cannot be fetched or parsed."""

    def __init__(self, source: str, status: Union[int, str], detail: str = "") -> None:
        self.source = source
        self.status = status
        self.detail = detail
        message = f"Failed to load {source}: {status}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _with_id(record: Dict[str, Any], key: str) -> Dict[str, Any]:
    if "id" in record:
        return record
    return {**record, "id": key}


def normalize_catalog(payload: Any) -> List[Dict[str, Any]]:
    """Turn the supported catalog layouts into a flat list of exercise records."""
    if isinstance(payload, dict) and "exercises" in payload:
        payload = payload["exercises"]

    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]

    if isinstance(payload, dict):
        records: List[Dict[str, Any]] = []
        for key, value in payload.items():
            # `_metadata` style entries are not exercises
            if str(key).startswith("_") or not isinstance(value, dict):
                continue
            records.append(_with_id(value, str(key)))
        return records

    return []


def _parse_text(text: str, yaml_format: bool) -> Any:
    if yaml_format:
        return yaml.safe_load(text)
    return json.loads(text)


def read_catalog_file(path: Path) -> List[Dict[str, Any]]:
    """Read a catalog from a JSON or YAML file."""
    source = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(source, "unreadable", str(exc)) from exc

    try:
        payload = _parse_text(text, path.suffix.lower() in {".yaml", ".yml"})
    except (ValueError, yaml.YAMLError) as exc:
        raise CatalogLoadError(source, "invalid catalog", str(exc)) from exc
    return normalize_catalog(payload)


def fetch_catalog(
    url: str,
    timeout_seconds: float = 30,
    max_retries: int = 3,
) -> List[Dict[str, Any]]:
    """GET a JSON catalog, retrying transient failures with capped backoff."""
    last_status: Union[int, str] = "no response"
    last_detail = ""

    for attempt in range(1, max(max_retries, 1) + 1):
        try:
            response = requests.get(url, timeout=timeout_seconds)
        except requests.RequestException as exc:
            last_status, last_detail = type(exc).__name__, str(exc)
        else:
            if response.status_code in RETRYABLE_STATUS:
                last_status, last_detail = response.status_code, ""
            elif response.status_code >= 400:
                raise CatalogLoadError(url, response.status_code)
            else:
                try:
                    return normalize_catalog(response.json())
                except ValueError as exc:
                    raise CatalogLoadError(url, response.status_code, f"invalid JSON: {exc}") from exc

        if attempt >= max_retries:
            break
        logger.warning("Catalog request to %s failed (%s), retrying", url, last_status)
        time.sleep(min(2**attempt, 8))

    raise CatalogLoadError(url, last_status, last_detail)


def load_catalog(
    source: Union[str, Path],
    timeout_seconds: float = 30,
    max_retries: int = 3,
) -> List[Dict[str, Any]]:
    """Load a catalog from a URL or a local file path."""
    if isinstance(source, str) and is_url(source):
        catalog = fetch_catalog(source, timeout_seconds=timeout_seconds, max_retries=max_retries)
    else:
        catalog = read_catalog_file(Path(source).expanduser())
    logger.debug("Loaded %d exercises from %s", len(catalog), source)
    return catalog

