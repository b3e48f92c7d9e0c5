"""
apifixture config validate command.

SUMMARY: Validate configuration against the bundled schema
"""
from __future__ import annotations

import argparse
import sys

from apifixture.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from apifixture.core.config import ConfigManager
from apifixture.core.exceptions import ApiFixtureError

SUMMARY = "Validate configuration against the bundled schema"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        ConfigManager(repo_root).load_config(validate=True)
    except ApiFixtureError as e:
        formatter.error(e, f"Configuration is invalid: {e}", error_code="config_invalid")
        return 1

    formatter.success({"valid": True, "repoRoot": str(repo_root)}, "Configuration is valid.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
