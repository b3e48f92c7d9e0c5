"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from apifixture.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Repository root from ``--repo-root``, or auto-detected."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()
