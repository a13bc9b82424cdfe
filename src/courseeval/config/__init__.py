"""Configuration file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import load_config


class ConfigManager:
    """YAML-backed settings loader rooted at a directory."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def path_for(self, name: str) -> Path:
        """Resolve a settings name; ``.yaml`` is appended to bare names."""
        if Path(name).suffix:
            return self._base_path / name
        return self._base_path / f"{name}.yaml"

    def load(self, name: str) -> dict[str, Any]:
        """Load a raw YAML mapping; an empty file yields an empty mapping."""
        path = self.path_for(name)
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a YAML mapping")
        return loaded

    def settings(self, name: str) -> dict[str, Any]:
        """Load and validate a settings file into container overrides."""
        return load_config(self.load(name)).to_settings()


__all__ = ["ConfigManager"]
