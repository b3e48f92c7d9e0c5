"""Deep merge used when layering configuration files.

Array merging follows override semantics:
  - Default: replace array entirely
  - Prefix with "+": append to existing array
  - Prefix with "=": explicit replace (same as default)
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Lower-priority layer (e.g. bundled defaults)
        override: Higher-priority layer (e.g. a project config file)

    Returns:
        New merged dictionary; nested lists follow `merge_arrays`

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Only an exact "+" or "=" first element is treated as a marker, so a
    prefix list such as ["+X_"] replaces the base as plain data.

    Args:
        base: List from the lower-priority layer
        override: List from the higher-priority layer

    Returns:
        Merged list (``base`` itself when ``override`` is empty)

    Example:
        >>> merge_arrays(["PYTEST_"], ["+", "COV_"])
        ['PYTEST_', 'COV_']
        >>> merge_arrays(["PYTEST_"], ["COV_"])
        ['COV_']
    """
    if not override:
        return base
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
