"""Per-test reset of ambient process state (environment variables, cwd)."""
from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, Optional

logger = logging.getLogger(__name__)


class EnvironmentReinitializer:
    """Restores ``os.environ`` and the working directory to a baseline.

    The baseline is taken at construction (or by calling `snapshot`). With
    ``env_keys`` only those variables are tracked; otherwise every variable
    is. Variables starting with one of ``ignore_prefixes`` are never touched:
    pytest keeps its own ``PYTEST_CURRENT_TEST`` bookkeeping there.
    """

    def __init__(
        self,
        env_keys: Optional[Iterable[str]] = None,
        *,
        ignore_prefixes: Iterable[str] = ("PYTEST_",),
        restore_cwd: bool = True,
    ) -> None:
        self.env_keys = frozenset(env_keys or ())
        self.ignore_prefixes = tuple(ignore_prefixes)
        self.restore_cwd = restore_cwd
        self._env: Dict[str, str] = {}
        self._cwd: Optional[str] = None
        self.snapshot()

    def _tracked(self, key: str) -> bool:
        if self.ignore_prefixes and key.startswith(self.ignore_prefixes):
            return False
        return not self.env_keys or key in self.env_keys

    @staticmethod
    def _current_cwd() -> Optional[str]:
        try:
            return os.getcwd()
        except FileNotFoundError:
            return None

    def snapshot(self) -> None:
        """Record the current state as the baseline."""
        self._env = {k: v for k, v in os.environ.items() if self._tracked(k)}
        self._cwd = self._current_cwd()

    def reinitialize(self) -> None:
        added = [k for k in os.environ if self._tracked(k) and k not in self._env]
        for key in added:
            del os.environ[key]
        changed = 0
        for key, value in self._env.items():
            if os.environ.get(key) != value:
                os.environ[key] = value
                changed += 1

        if self.restore_cwd and self._cwd is not None and self._current_cwd() != self._cwd:
            os.chdir(self._cwd)

        if added or changed:
            logger.debug("Environment reset: %d removed, %d restored", len(added), changed)


__all__ = ["EnvironmentReinitializer"]
