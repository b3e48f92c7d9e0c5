from __future__ import annotations

from typing import Any, Dict, Mapping


class ApiFixtureError(Exception):
    """Base exception for apifixture."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(ApiFixtureError, ValueError):
    """Raised for an invalid base directory, fixture declaration or config file."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ApiFixtureError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class NotFoundError(ApiFixtureError, LookupError):
    """Raised when a fixture identifier resolves to no file."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ApiFixtureError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class FixtureExecutionError(ApiFixtureError, RuntimeError):
    """Raised when a fixture script or fixture method fails."""

    def __init__(
        self,
        message: str,
        *,
        fixture: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if fixture:
            ctx["fixture"] = fixture
        ApiFixtureError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


__all__ = [
    "ApiFixtureError",
    "ConfigurationError",
    "NotFoundError",
    "FixtureExecutionError",
]
