"""CLI output formatting (JSON/text modes).

Results go to stdout; errors go to stderr in both modes so command output
can be piped without picking up failure messages.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from apifixture.core.exceptions import ApiFixtureError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Output a command result.

        Args:
            data: Result payload, merged under ``status`` in JSON mode
            message: Human-readable summary (used in text mode)
            status: Status string for JSON output
        """
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Output an error to stderr.

        Args:
            error: The exception that occurred; apifixture errors contribute
                their class name and context to the JSON payload
            message: Optional human-readable message (defaults to str(error))
            error_code: Command-level error code for JSON output
        """
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {}
            if isinstance(error, ApiFixtureError):
                output.update(error.to_json_error())
            output.update({"error": error_code, "message": msg})
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        """Output raw JSON data.

        Args:
            data: Data to serialize as JSON
        """
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        """Output a text line, regardless of mode.

        Args:
            message: Message to output
        """
        print(message)


__all__ = ["OutputFormatter"]
