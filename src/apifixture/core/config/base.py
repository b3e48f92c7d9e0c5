"""Base class for domain-specific configuration accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from apifixture.core.utils.paths import resolve_project_root

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")

        cfg = MyConfig(repo_root=Path("/path/to/project"))
        print(cfg.my_setting)
    """

    def __init__(self, repo_root: Optional[Path] = None, *, validate: bool = False) -> None:
        self._repo_root = Path(repo_root) if repo_root is not None else None
        self._config = get_cached_config(repo_root=self._repo_root, validate=validate)

    @property
    def repo_root(self) -> Path:
        """The explicit repo root, or the auto-detected project root."""
        if self._repo_root:
            return self._repo_root
        return resolve_project_root()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This domain's configuration section (empty dict when missing)."""
        section = self._config.get(self._config_section(), {}) or {}
        return section if isinstance(section, dict) else {}

    def _resolve_path(self, raw: Any) -> Path:
        p = Path(str(raw)).expanduser()
        return p if p.is_absolute() else self.repo_root / p


__all__ = ["BaseDomainConfig"]
