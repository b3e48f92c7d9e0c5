"""
apifixture fixture run command.

SUMMARY: Apply fixture scripts outside of a test run

Applies each identifier in order, skipping duplicates the same way a test
would. With --revert the rollback scripts are run afterwards, newest first,
which is handy for checking that a fixture and its rollback pair up.
"""
from __future__ import annotations

import argparse
import sys

from apifixture.cli import OutputFormatter, add_base_dir_flag, add_json_flag, add_repo_root_flag, get_repo_root
from apifixture.core.exceptions import ApiFixtureError
from apifixture.core.fixtures import FixtureLifecycleManager, build_manager, describe

SUMMARY = "Apply fixture scripts outside of a test run"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("identifiers", nargs="+", metavar="identifier", help="Fixture identifiers to apply")
    parser.add_argument(
        "--revert",
        action="store_true",
        help="Revert the applied fixtures afterwards",
    )
    add_base_dir_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _revert_after_failure(manager: FixtureLifecycleManager, apply_error: ApiFixtureError) -> None:
    """Revert what was applied before ``apply_error``.

    The apply error stays the reported one; a rollback failure is recorded
    in its context under ``revertError``.
    """
    try:
        manager.revert_all()
    except ApiFixtureError as revert_error:
        apply_error.context["revertError"] = str(revert_error)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    applied = []
    try:
        manager = build_manager(get_repo_root(args), base_dir=args.base_dir)
        references = manager.resolve_references(args.identifiers)
        try:
            manager.apply_fixtures(references)
        except ApiFixtureError as apply_error:
            if args.revert:
                _revert_after_failure(manager, apply_error)
            raise
        applied = [describe(ref) for ref in manager.applied_fixtures]
        if args.revert:
            manager.revert_all()
    except ApiFixtureError as e:
        formatter.error(e, error_code="fixture_run_error")
        return 1

    lines = [f"Applied {len(applied)} fixture(s)"]
    lines.extend(f"  {label}" for label in applied)
    if args.revert:
        lines.append("Reverted")
    formatter.success({"applied": applied, "reverted": bool(args.revert)}, "\n".join(lines))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
