"""Domain-specific configuration for the module path registry."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Dict

from ..base import BaseDomainConfig


class ModulesConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "modules"

    @cached_property
    def registry(self) -> Dict[str, Path]:
        """Module name -> absolute directory."""
        raw = self.section.get("registry") or {}
        if not isinstance(raw, dict):
            return {}
        return {
            str(name).strip(): self._resolve_path(path)
            for name, path in raw.items()
            if str(name).strip() and path
        }

    @cached_property
    def discover_packages(self) -> bool:
        return bool(self.section.get("discoverPackages", True))


__all__ = ["ModulesConfig"]
