"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class ConfigManager:
    """Simple YAML-backed configuration loader."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name without file extension."""
        return self.load_path(self._base_path / f"{name}.yaml")

    def load_path(self, path: str | Path) -> dict[str, Any]:
        """Load a YAML file relative to the base path.

        Missing files and empty documents both load as an empty mapping so that
        callers fall back to the schema defaults.
        """
        path = self._base_path / path
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config {path} must be a YAML mapping")
        return loaded


__all__ = ["ConfigManager"]
