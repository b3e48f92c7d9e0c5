"""Module name -> directory registry used by ``Module::path`` identifiers."""
from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

from apifixture.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ComponentRegistrar:
    """Registered module roots, with optional fallback to importable packages.

    ``ComponentRegistrar({"Catalog": "/app/catalog"}).get_path("Catalog")``
    returns ``Path("/app/catalog")``. With ``discover_packages`` enabled,
    ``get_path("myapp.tests")`` returns the directory of that package.
    """

    def __init__(
        self,
        paths: Optional[Mapping[str, Union[str, Path]]] = None,
        *,
        discover_packages: bool = False,
    ) -> None:
        self.discover_packages = discover_packages
        self._paths: Dict[str, Path] = {}
        for name, path in (paths or {}).items():
            self.register(name, path)

    def register(self, name: str, path: Union[str, Path]) -> None:
        name = str(name).strip()
        if not name:
            raise ConfigurationError("Module name must not be empty")
        self._paths[name] = Path(path)

    def get_path(self, name: str) -> Optional[Path]:
        if name in self._paths:
            return self._paths[name]
        if self.discover_packages:
            return self._package_dir(name)
        return None

    def names(self) -> List[str]:
        return sorted(self._paths)

    def items(self) -> List[Tuple[str, Path]]:
        return sorted(self._paths.items())

    @staticmethod
    def _package_dir(name: str) -> Optional[Path]:
        if not name or not all(part.isidentifier() for part in name.split(".")):
            return None
        try:
            spec = importlib.util.find_spec(name)
        except (ImportError, ValueError):
            return None
        if spec is None or not spec.submodule_search_locations:
            return None
        location = next(iter(spec.submodule_search_locations), None)
        if location is None:
            return None
        logger.debug("Resolved module %s to package directory %s", name, location)
        return Path(location).resolve()


__all__ = ["ComponentRegistrar"]
