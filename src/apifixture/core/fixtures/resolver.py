"""Fixture identifier -> script path resolution."""
from __future__ import annotations

from pathlib import Path
from typing import Union

from apifixture.core.exceptions import ConfigurationError, NotFoundError

from .protocols import ModulePathResolver


class FixturePathResolver:
    """Resolves identifiers in three steps.

    1. The identifier is an existing file as given (absolute or cwd-relative).
    2. ``<base_dir>/<identifier>`` is an existing file.
    3. ``Module::relative/path.py``: the module root comes from the
       ModulePathResolver and the joined path must exist.
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        module_resolver: ModulePathResolver,
        *,
        module_delimiter: str = "::",
        rollback_suffix: str = "_rollback",
    ) -> None:
        base = Path(base_dir)
        if not base.is_dir():
            raise ConfigurationError(
                f"Fixture base directory '{base_dir}' does not exist.",
                context={"base_dir": str(base_dir)},
            )
        self.base_dir = base.resolve()
        self.module_resolver = module_resolver
        self.module_delimiter = module_delimiter
        self.rollback_suffix = rollback_suffix

    def resolve(self, identifier: str) -> Path:
        if not identifier:
            raise NotFoundError("Fixture '' not found.", context={"fixture": identifier})

        as_given = Path(identifier)
        if as_given.is_file():
            return as_given.absolute()

        in_base = self.base_dir / identifier
        if in_base.is_file():
            return in_base

        parts = identifier.split(self.module_delimiter)
        if len(parts) < 2:
            raise NotFoundError(f"Fixture '{identifier}' not found.", context={"fixture": identifier})
        module_name, relative_path = parts[0], parts[1]

        module_path = self.module_resolver.get_path(module_name)
        if not module_path:
            raise NotFoundError(
                f"Fixture '{identifier}' not found.",
                context={"fixture": identifier, "module": module_name},
            )

        resolved = Path(module_path) / relative_path.lstrip("/")
        if not resolved.is_file():
            raise NotFoundError(
                f"Fixture '{identifier}' not found.",
                context={"fixture": identifier, "module": module_name, "path": str(resolved)},
            )
        return resolved

    def rollback_path_for(self, path: Union[str, Path]) -> Path:
        """``dir/products.py`` -> ``dir/products_rollback.py``."""
        p = Path(path)
        return p.with_name(f"{p.stem}{self.rollback_suffix}{p.suffix}")


__all__ = ["FixturePathResolver"]
