from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


def _default_catalog_path() -> Path:
    return Path(__file__).resolve().parent / "data" / "languages.yaml"


class YamlLanguageCatalog:
    """Language catalog read from a YAML mapping of code -> metadata."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = Path(path) if path else _default_catalog_path()

    def get_languages(self) -> Dict[str, Dict[str, Any]]:
        data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Language catalog must be a mapping/dict: {self.path}")

        languages: Dict[str, Dict[str, Any]] = {}
        for code, meta in data.items():
            # Bare strings are shorthand for the display name.
            if isinstance(meta, str):
                meta = {"name": meta}
            languages[str(code)] = dict(meta or {})
        logger.info("Loaded %d languages from %s", len(languages), self.path)
        return languages
