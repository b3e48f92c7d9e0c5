"""Common CLI argument registration helpers.

Every command takes --json and --repo-root; commands that touch fixture
scripts also take --base-dir.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag overriding project root detection.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path (default: APIFIXTURE_PROJECT_ROOT or detection)",
    )


def add_base_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --base-dir flag overriding ``fixtures.baseDir``.

    Relative values are taken from the current working directory, not from
    the project root.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--base-dir",
        type=str,
        metavar="DIR",
        help="Fixture base directory (overrides fixtures.baseDir)",
    )


__all__ = ["add_json_flag", "add_repo_root_flag", "add_base_dir_flag"]
