"""
apifixture configuration management (layered YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from apifixture.core.exceptions import ConfigurationError
from apifixture.core.utils.io import merge_yaml_directory
from apifixture.core.utils.paths import PROJECT_ROOT_ENV, get_project_config_dir, resolve_project_root
from apifixture.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "APIFIXTURE_"
CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate apifixture configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: APIFIXTURE_<section>__<key>
    2. Project-local config: .apifixture/config.local/*.yaml (uncommitted)
    3. Project config: .apifixture/config/*.yaml (alphabetical order)
    4. Bundled defaults: apifixture.data/config/*.yaml (alphabetical order)
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else resolve_project_root()

        project_root_dir = get_project_config_dir(self.repo_root)
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = project_root_dir / "config"
        self.project_local_config_dir = project_root_dir / "config.local"

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration (cached per repo root)."""
        from .cache import get_cached_config

        return get_cached_config(repo_root=self.repo_root, validate=validate)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a dot-separated key (``fixtures.baseDir``) from the merged config."""
        node: Any = self.load_config(validate=False)
        for part in [p for p in key.split(".") if p]:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def validate_schema(self, config: Dict[str, Any]) -> None:
        from apifixture.core.schemas.validation import SchemaValidationError, validate_payload

        try:
            validate_payload(config, CONFIG_SCHEMA)
        except SchemaValidationError as exc:
            raise ConfigurationError(str(exc), context={"errors": exc.errors}) from exc

    # ---- environment overrides -------------------------------------------

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, int, object]]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[Union[str, int, object]] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigurationError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
                return []
            if seg.isdigit():
                processed.append(int(seg))
            elif seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[Union[str, int, object]], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == PROJECT_ROOT_ENV:
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                continue
            path = self._parse_env_key(raw, strict=strict)
            if path:
                yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int, object]], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path[:-1]):
            if isinstance(part, int) or part is self.ARRAY_APPEND_MARKER:
                raise ConfigurationError("Invalid override path: list index/APPEND may only appear at leaf")
            if not isinstance(cur, dict):
                raise ConfigurationError("Override path traverses a non-mapping value")
            nxt = path[i + 1]
            key = {k.lower(): k for k in cur if isinstance(k, str)}.get(str(part), part)
            if key not in cur:
                cur[key] = [] if (isinstance(nxt, int) or nxt is self.ARRAY_APPEND_MARKER) else {}
            cur = cur[key]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ConfigurationError("APPEND requires a list")
            cur.append(value)
        elif isinstance(leaf, int):
            if not isinstance(cur, list):
                raise ConfigurationError("Index assignment requires a list")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
        else:
            if not isinstance(cur, dict):
                raise ConfigurationError("Key assignment requires a mapping")
            key = {k.lower(): k for k in cur if isinstance(k, str)}.get(str(leaf), leaf)
            cur[key] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)

    # ---- loading ---------------------------------------------------------

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        try:
            for directory in (self.core_config_dir, self.project_config_dir, self.project_local_config_dir):
                cfg = merge_yaml_directory(cfg, directory)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Unable to load configuration: {exc}") from exc

        self.apply_env_overrides(cfg, strict=validate)

        if validate:
            self.validate_schema(cfg)
        logger.debug("Loaded configuration for %s", self.repo_root)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX"]
