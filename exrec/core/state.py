"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from exrec.core.config import resolve_catalog_source, resolve_output_dir


@dataclass
class CLIState:
    """Output mode, loaded configuration and console for one invocation."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    def catalog_source(self, explicit: Optional[str] = None) -> Optional[str]:
        return resolve_catalog_source(self.config, explicit=explicit)

    def export_dir(self, explicit: Optional[Path] = None) -> Path:
        return resolve_output_dir(self.config, explicit=explicit)
