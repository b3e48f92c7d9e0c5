"""Domain-specific configuration for fixture discovery and rollback.

This domain reads the top-level `fixtures` config section.
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class FixturesConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "fixtures"

    @cached_property
    def base_dir(self) -> Path:
        raw = self.section.get("baseDir")
        s = str(raw).strip() if raw is not None else ""
        return self._resolve_path(s or "tests/fixtures")

    @cached_property
    def annotation(self) -> str:
        raw = self.section.get("annotation")
        s = str(raw).strip() if raw is not None else ""
        return s or "api_data_fixture"

    @cached_property
    def rollback_suffix(self) -> str:
        return str(self.section.get("rollbackSuffix") or "_rollback")

    @cached_property
    def callable_rollback_suffix(self) -> str:
        return str(self.section.get("callableRollbackSuffix") or "Rollback")

    @cached_property
    def module_delimiter(self) -> str:
        return str(self.section.get("moduleDelimiter") or "::")

    @cached_property
    def isolate_revert_failures(self) -> bool:
        return bool(self.section.get("isolateRevertFailures", False))


__all__ = ["FixturesConfig"]
