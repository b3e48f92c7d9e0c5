"""Fixture declarations: the ``api_data_fixture`` decorator and its reader.

Declarations live on the test function ("method" scope) or on the test class
("class" scope). They come from two places, read in this order:

- ``@api_data_fixture("products.py", "Catalog::fixtures/prices.py")``
- pytest marks with the same name: ``@pytest.mark.api_data_fixture("products.py")``
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple, TypeVar

from apifixture.core.exceptions import ConfigurationError

from .subject import FixtureSubject

logger = logging.getLogger(__name__)

FIXTURES_ATTR = "__api_data_fixtures__"
DEFAULT_ANNOTATION = "api_data_fixture"
SCOPES = ("method", "class")

T = TypeVar("T")


def api_data_fixture(*identifiers: str) -> Callable[[T], T]:
    """Declare fixtures on a test function or test class.

    Stacked decorators keep top-to-bottom source order.
    """
    for identifier in identifiers:
        if not isinstance(identifier, str):
            raise ConfigurationError(
                f"Fixture identifiers must be strings, got {type(identifier).__name__}"
            )

    def decorator(obj: T) -> T:
        if isinstance(obj, type):
            # Own declarations only; a subclass never extends its parent's list.
            existing = list(obj.__dict__.get(FIXTURES_ATTR, ()))
        else:
            existing = list(getattr(obj, FIXTURES_ATTR, ()))
        setattr(obj, FIXTURES_ATTR, [*identifiers, *existing])
        return obj

    return decorator


class MetadataCache:
    """Named cache of parsed declarations, cleaned after every test."""

    def __init__(self, name: str = "fixture_metadata") -> None:
        self.name = name
        self._entries: Dict[Hashable, Tuple[str, ...]] = {}

    def get(self, key: Hashable) -> Optional[Tuple[str, ...]]:
        return self._entries.get(key)

    def set(self, key: Hashable, value: Iterable[str]) -> None:
        self._entries[key] = tuple(value)

    def clean(self) -> None:
        if self._entries:
            logger.debug("Cleaning %s cache (%d entries)", self.name, len(self._entries))
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class AnnotationMetadataProvider:
    """Reads decorator and pytest-mark declarations for a test."""

    def __init__(self, annotation: str = DEFAULT_ANNOTATION, cache: Optional[MetadataCache] = None) -> None:
        self.annotation = annotation
        self.cache = cache if cache is not None else MetadataCache()

    def get_fixtures(self, subject: FixtureSubject, scope: str) -> List[str]:
        if scope not in SCOPES:
            raise ValueError(f"Unknown fixture scope '{scope}' (expected one of {', '.join(SCOPES)})")

        target = subject.method if scope == "method" else subject.owner
        if target is None:
            return []

        key = (scope, self.annotation, target)
        cached = self.cache.get(key)
        if cached is None:
            cached = tuple(self._read(target))
            self.cache.set(key, cached)
        return list(cached)

    def _read(self, target: Any) -> List[str]:
        declared = [str(i) for i in (getattr(target, FIXTURES_ATTR, None) or ())]

        # pytest appends marks as decorators are applied (bottom-up).
        marks = list(getattr(target, "pytestmark", None) or ())
        for mark in reversed(marks):
            mark = getattr(mark, "mark", mark)
            if getattr(mark, "name", None) != self.annotation:
                continue
            for arg in getattr(mark, "args", ()):
                if not isinstance(arg, str):
                    raise ConfigurationError(
                        f"Fixture identifiers must be strings, got {type(arg).__name__}"
                    )
                declared.append(arg)
        return declared


__all__ = [
    "FIXTURES_ATTR",
    "DEFAULT_ANNOTATION",
    "SCOPES",
    "api_data_fixture",
    "MetadataCache",
    "AnnotationMetadataProvider",
]
