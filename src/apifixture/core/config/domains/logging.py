"""Domain-specific configuration for apifixture's own log file."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def level(self) -> str:
        raw = self.section.get("level")
        s = str(raw).strip().upper() if raw is not None else ""
        return s or "INFO"

    @cached_property
    def path(self) -> Path:
        raw = self.section.get("path")
        s = str(raw).strip() if raw is not None else ""
        return self._resolve_path(s or ".apifixture/logs/apifixture.log")


__all__ = ["LoggingConfig"]
