"""
apifixture module list command.

SUMMARY: List modules usable in 'Module::path' identifiers
"""
from __future__ import annotations

import argparse
import sys

from apifixture.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from apifixture.core.exceptions import ApiFixtureError
from apifixture.core.fixtures import build_registrar

SUMMARY = "List modules usable in 'Module::path' identifiers"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        registrar = build_registrar(get_repo_root(args))
    except ApiFixtureError as e:
        formatter.error(e, error_code="module_list_error")
        return 1

    modules = [
        {"name": name, "path": str(path), "exists": path.is_dir()}
        for name, path in registrar.items()
    ]
    if formatter.json_mode:
        formatter.json_output({"modules": modules, "discoverPackages": registrar.discover_packages})
        return 0

    if not modules:
        formatter.text("No modules registered.")
    for entry in modules:
        marker = "" if entry["exists"] else "  (missing)"
        formatter.text(f"{entry['name']}: {entry['path']}{marker}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
