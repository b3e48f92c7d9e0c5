"""
apifixture config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and environment variables. Supports filtering by key and multiple output formats.
"""
from __future__ import annotations

import argparse
import sys
from typing import Any

import yaml

from apifixture.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from apifixture.core.config import ConfigManager
from apifixture.core.exceptions import ApiFixtureError

SUMMARY = "Show current configuration"

_MISSING = object()


def _nest_key(key: str, value: Any) -> Any:
    """Nest a dot-notation key into a YAML-friendly mapping."""
    out = value
    for part in reversed([p for p in str(key).split(".") if p]):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'fixtures.baseDir')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml", "table"],
        default="table",
        help="Output format (default: table)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _format_value(value: Any, indent: int = 0) -> str:
    """Format a value for table display."""
    prefix = "  " * indent
    if isinstance(value, dict):
        if not value:
            return "{}"
        lines = []
        for k, v in value.items():
            formatted = _format_value(v, indent + 1)
            if "\n" in formatted:
                lines.append(f"{prefix}{k}:")
                lines.append(formatted)
            else:
                lines.append(f"{prefix}{k}: {formatted}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return "[]"
        return f"[{', '.join(str(v) for v in value)}]"
    return str(value)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    output_format = "json" if formatter.json_mode else getattr(args, "format", "table")

    try:
        config_manager = ConfigManager(get_repo_root(args))
        if args.key:
            value = config_manager.get(args.key, _MISSING)
            if value is _MISSING:
                formatter.error(KeyError(args.key), f"Key not found: {args.key}", error_code="config_key_not_found")
                return 1
            data = {args.key: value}
        else:
            value = data = config_manager.load_config(validate=False)
    except ApiFixtureError as e:
        formatter.error(e, error_code="config_show_error")
        return 1

    if output_format == "json":
        formatter.json_output(data)
    elif output_format == "yaml":
        payload = _nest_key(args.key, value) if args.key else data
        formatter.text(yaml.safe_dump(payload, default_flow_style=False, sort_keys=True).rstrip())
    elif args.key:
        formatter.text(f"{args.key}:")
        formatter.text(_format_value(value, indent=1))
    else:
        formatter.text("apifixture configuration")
        formatter.text("=" * 60)
        for section in sorted(data):
            formatter.text("")
            formatter.text(f"[{section}]")
            formatter.text(_format_value(data[section], indent=1))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
