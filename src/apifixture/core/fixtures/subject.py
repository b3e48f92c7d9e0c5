"""The running test, as seen by the fixture lifecycle."""
from __future__ import annotations

import unittest
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class FixtureSubject:
    """Test class, test function and test instance of one test run."""

    __test__ = False

    name: str
    owner: Optional[type] = None
    method: Optional[Callable[..., Any]] = None
    instance: Any = None

    @classmethod
    def from_unittest(cls, case: unittest.TestCase) -> "FixtureSubject":
        owner = type(case)
        method_name = getattr(case, "_testMethodName", "")
        return cls(
            name=case.id(),
            owner=owner,
            method=getattr(owner, method_name, None),
            instance=case,
        )

    @classmethod
    def from_pytest_item(cls, item: Any) -> "FixtureSubject":
        return cls(
            name=str(getattr(item, "nodeid", getattr(item, "name", ""))),
            owner=getattr(item, "cls", None),
            method=getattr(item, "function", None),
            instance=getattr(item, "instance", None),
        )


def as_subject(test: Any) -> FixtureSubject:
    """Coerce a subject, a ``unittest.TestCase`` or a pytest item."""
    if isinstance(test, FixtureSubject):
        return test
    if isinstance(test, unittest.TestCase):
        return FixtureSubject.from_unittest(test)
    if hasattr(test, "nodeid"):
        return FixtureSubject.from_pytest_item(test)
    raise TypeError(f"Unsupported test object: {type(test).__name__}")


__all__ = ["FixtureSubject", "as_subject"]
