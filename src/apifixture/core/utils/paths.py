"""Project path resolution.

Resolution priority for the project root:
1. ``APIFIXTURE_PROJECT_ROOT`` environment variable
2. Nearest ancestor of the cwd holding a ``.apifixture`` directory
3. Git repository root via ``git rev-parse --show-toplevel``
4. The current working directory
"""
from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional

from apifixture.core.exceptions import ConfigurationError

PROJECT_ROOT_ENV = "APIFIXTURE_PROJECT_ROOT"
PROJECT_CONFIG_DIR = ".apifixture"

# Cache for the git lookup; honoured only while the cwd stays inside it.
_PROJECT_ROOT_CACHE: Optional[Path] = None


class ProjectPathError(ConfigurationError):
    """Raised when path resolution fails."""


def _git_toplevel(cwd: Path) -> Optional[Path]:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return None
    root_str = (result.stdout or "").strip()
    if not root_str:
        return None
    path = Path(root_str).expanduser().resolve()
    return path if path.exists() else None


def resolve_project_root() -> Path:
    """Resolve the project root.

    Raises:
        ProjectPathError: If ``APIFIXTURE_PROJECT_ROOT`` points at a missing path
            or at the ``.apifixture`` directory itself.
    """
    global _PROJECT_ROOT_CACHE

    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise ProjectPathError(f"{PROJECT_ROOT_ENV} points at missing path: {env_path}")
        if env_path.name == PROJECT_CONFIG_DIR:
            raise ProjectPathError(
                f"{PROJECT_ROOT_ENV} points to the {PROJECT_CONFIG_DIR} directory: {env_path}. "
                "It must point to the project root."
            )
        return env_path

    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_CONFIG_DIR).is_dir():
            return candidate

    if _PROJECT_ROOT_CACHE is not None and (
        cwd == _PROJECT_ROOT_CACHE or _PROJECT_ROOT_CACHE in cwd.parents
    ):
        return _PROJECT_ROOT_CACHE

    git_root = _git_toplevel(cwd)
    if git_root is not None:
        _PROJECT_ROOT_CACHE = git_root
        return git_root
    return cwd


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.apifixture`` (not created)."""
    return Path(repo_root) / PROJECT_CONFIG_DIR


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIR",
    "ProjectPathError",
    "resolve_project_root",
    "get_project_config_dir",
]
