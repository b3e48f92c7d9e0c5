"""Fixture references: what a declared identifier turned into.

A declaration is resolved once, when the test starts, into either a script
(`PathReference`) or a method on the test class (`CallableReference`).
"""
from __future__ import annotations

import inspect
import json
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Union


@dataclass(frozen=True)
class PathReference:
    """A fixture script; the identifier is resolved to a file at apply time."""

    identifier: str


@dataclass(frozen=True)
class CallableReference:
    """A zero-argument method on the test class.

    Equality only considers ``owner`` and ``method`` so the applied-log
    duplicate check does not depend on the test instance.
    """

    owner: type
    method: str
    instance: Any = field(default=None, compare=False, repr=False)

    def resolve(self) -> Callable[[], Any]:
        target = self.instance if self.instance is not None else self.owner
        return getattr(target, self.method)

    def with_method(self, method: str) -> "CallableReference":
        return replace(self, method=method)


FixtureReference = Union[PathReference, CallableReference]


def _has_required_params(target: Callable[..., Any]) -> bool:
    try:
        sig = inspect.signature(target)
    except (TypeError, ValueError):
        return False
    for param in sig.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return True
    return False


def zero_arg_callable(owner: Optional[type], name: str, instance: Any = None) -> Optional[Callable[[], Any]]:
    """Return ``owner.<name>`` when it can be called without arguments.

    Static and class methods always qualify. Plain methods qualify only when
    ``instance`` is given, since they need a receiver.
    """
    if owner is None or not name.isidentifier():
        return None
    try:
        raw = inspect.getattr_static(owner, name)
    except AttributeError:
        return None

    if isinstance(raw, (staticmethod, classmethod)):
        target = getattr(owner, name)
    elif instance is not None and inspect.isfunction(raw):
        target = getattr(instance, name)
    else:
        return None

    if not callable(target) or _has_required_params(target):
        return None
    return target


def describe(ref: Any) -> str:
    """JSON label for error messages, or ``"callback"`` when not encodable."""
    if isinstance(ref, PathReference):
        payload: Any = ref.identifier
    elif isinstance(ref, CallableReference):
        payload = [ref.owner.__qualname__, ref.method]
    else:
        payload = ref
    try:
        return json.dumps(payload)
    except (TypeError, ValueError):
        return "callback"


__all__ = [
    "PathReference",
    "CallableReference",
    "FixtureReference",
    "zero_arg_callable",
    "describe",
]
