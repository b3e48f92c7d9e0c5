"""Schema validation for configuration payloads.

Schemas are stored as YAML files under ``apifixture.data/schemas`` and
evaluated with jsonschema (Draft 2020-12).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from apifixture.data import get_data_path
from apifixture.core.config.cache import register_cache_clearer
from apifixture.core.utils.io import read_yaml


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    def __init__(self, message: str, *, errors: List[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


@lru_cache(maxsize=8)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by file name (e.g. ``config.schema.yaml``)."""
    path = get_data_path("schemas", schema_name)
    schema = read_yaml(path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise SchemaValidationError(f"Schema {schema_name} is not a mapping")
    return schema


def _format_error(error: Any) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        SchemaValidationError: Listing every violation, sorted by location.
    """
    validator = Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(map(str, e.absolute_path)))
    if errors:
        messages = [_format_error(e) for e in errors]
        raise SchemaValidationError(
            f"Schema validation failed for {schema_name}: " + "; ".join(messages),
            errors=messages,
        )


register_cache_clearer("schemas", load_schema.cache_clear)

__all__ = ["SchemaValidationError", "load_schema", "validate_payload"]
