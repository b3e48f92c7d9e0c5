"""Collaborator protocols consumed by the fixture lifecycle manager."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .subject import FixtureSubject


@runtime_checkable
class MetadataProvider(Protocol):
    """Returns fixture identifiers declared for a test at one scope."""

    def get_fixtures(self, subject: "FixtureSubject", scope: str) -> List[str]: ...


@runtime_checkable
class ModulePathResolver(Protocol):
    """Maps a module name to its root directory, or None when unknown."""

    def get_path(self, name: str) -> Optional[Path]: ...


@runtime_checkable
class ProcessReinitializer(Protocol):
    """Resets ambient process state before a test starts."""

    def reinitialize(self) -> None: ...


@runtime_checkable
class CacheInvalidator(Protocol):
    """Drops a cache once a test has finished."""

    def clean(self) -> None: ...


__all__ = [
    "MetadataProvider",
    "ModulePathResolver",
    "ProcessReinitializer",
    "CacheInvalidator",
]
