"""
apifixture fixture resolve command.

SUMMARY: Show which script a fixture identifier resolves to
"""
from __future__ import annotations

import argparse
import sys

from apifixture.cli import OutputFormatter, add_base_dir_flag, add_json_flag, add_repo_root_flag, get_repo_root
from apifixture.core.exceptions import ApiFixtureError
from apifixture.core.fixtures import build_manager

SUMMARY = "Show which script a fixture identifier resolves to"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("identifier", help="Fixture identifier (e.g. 'products.py' or 'Catalog::fixtures/products.py')")
    add_base_dir_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        manager = build_manager(get_repo_root(args), base_dir=args.base_dir)
        manager.resolve_references([args.identifier])
        path = manager.resolve_fixture_path(args.identifier)
        rollback = manager.path_resolver.rollback_path_for(path)
        rollback_path = str(rollback) if rollback.is_file() else None

        lines = [f"{args.identifier} -> {path}"]
        if rollback_path:
            lines.append(f"  rollback: {rollback_path}")
        formatter.success(
            {"identifier": args.identifier, "path": str(path), "rollback": rollback_path},
            "\n".join(lines),
        )
        return 0
    except ApiFixtureError as e:
        formatter.error(e, error_code="fixture_resolve_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
