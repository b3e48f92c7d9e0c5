"""Domain-specific configuration for the per-test environment reset."""
from __future__ import annotations

from functools import cached_property
from typing import List

from ..base import BaseDomainConfig


class ReinitializeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "reinitialize"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def env_keys(self) -> List[str]:
        raw = self.section.get("envKeys", [])
        if not isinstance(raw, list):
            return []
        return [str(v).strip() for v in raw if str(v).strip()]

    @cached_property
    def ignore_env_prefixes(self) -> List[str]:
        raw = self.section.get("ignoreEnvPrefixes", ["PYTEST_"])
        if not isinstance(raw, list):
            return ["PYTEST_"]
        return [str(v) for v in raw if str(v)]

    @cached_property
    def restore_cwd(self) -> bool:
        return bool(self.section.get("restoreCwd", True))


__all__ = ["ReinitializeConfig"]
