from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.env import PATHS
from .storage import ProposalSettings

DEFAULT_LANGUAGE = "en_US"


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def default_language(self) -> str:
        return str(self.raw.get("default_language") or DEFAULT_LANGUAGE)

    @property
    def target_root(self) -> str:
        return str(((self.raw.get("paths") or {}).get("target_root")) or PATHS.target_root)

    @property
    def log_path(self) -> str:
        return str(((self.raw.get("paths") or {}).get("log")) or PATHS.log_default)

    @property
    def log_level(self) -> str:
        return str(self.raw.get("log_level") or "INFO").upper()

    @property
    def log_console(self) -> bool:
        return bool(self.raw.get("log_console", True))

    @property
    def languages_path(self) -> Optional[str]:
        p = (self.raw.get("paths") or {}).get("languages")
        return str(p) if p else None

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def prepdisk_command(self) -> List[str]:
        return [str(a) for a in (self.raw.get("prepdisk_command") or [])]

    @property
    def proposal(self) -> Dict[str, Any]:
        return dict(self.raw.get("proposal") or {})

    def proposal_settings(self) -> ProposalSettings:
        """Fresh settings for every proposal attempt."""
        return ProposalSettings.from_mapping(self.proposal)


def load_config(path: str) -> InstallerConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"installer config must contain a mapping/object: {p}")

    return InstallerConfig(raw=raw)
