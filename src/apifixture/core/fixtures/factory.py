"""Build a FixtureLifecycleManager from project configuration."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from apifixture.core.config.domains import FixturesConfig, ModulesConfig, ReinitializeConfig
from apifixture.core.utils.paths import resolve_project_root

from .environment import EnvironmentReinitializer
from .manager import FixtureLifecycleManager
from .metadata import AnnotationMetadataProvider, MetadataCache
from .modules import ComponentRegistrar
from .protocols import MetadataProvider


def build_registrar(repo_root: Optional[Path] = None) -> ComponentRegistrar:
    modules_cfg = ModulesConfig(repo_root=repo_root)
    return ComponentRegistrar(modules_cfg.registry, discover_packages=modules_cfg.discover_packages)


def build_manager(
    repo_root: Optional[Union[str, Path]] = None,
    *,
    base_dir: Optional[Union[str, Path]] = None,
    metadata_provider: Optional[MetadataProvider] = None,
) -> FixtureLifecycleManager:
    """Wire a manager from the ``fixtures``, ``modules`` and ``reinitialize`` sections.

    Args:
        repo_root: Project root; auto-detected when omitted.
        base_dir: Overrides ``fixtures.baseDir`` (relative paths are taken
            from the current working directory).
        metadata_provider: Overrides the decorator/pytest-mark reader.

    Raises:
        ConfigurationError: Invalid configuration or missing base directory.
    """
    root = Path(repo_root).resolve() if repo_root is not None else resolve_project_root()

    fixtures_cfg = FixturesConfig(repo_root=root, validate=True)
    reinit_cfg = ReinitializeConfig(repo_root=root)

    if metadata_provider is None:
        metadata_provider = AnnotationMetadataProvider(
            annotation=fixtures_cfg.annotation,
            cache=MetadataCache(),
        )

    reinitializer = None
    if reinit_cfg.enabled:
        reinitializer = EnvironmentReinitializer(
            reinit_cfg.env_keys,
            ignore_prefixes=reinit_cfg.ignore_env_prefixes,
            restore_cwd=reinit_cfg.restore_cwd,
        )

    return FixtureLifecycleManager(
        Path(base_dir) if base_dir is not None else fixtures_cfg.base_dir,
        metadata_provider=metadata_provider,
        module_resolver=build_registrar(root),
        reinitializer=reinitializer,
        cache_invalidator=getattr(metadata_provider, "cache", None),
        rollback_suffix=fixtures_cfg.rollback_suffix,
        callable_rollback_suffix=fixtures_cfg.callable_rollback_suffix,
        module_delimiter=fixtures_cfg.module_delimiter,
        isolate_revert_failures=fixtures_cfg.isolate_revert_failures,
    )


__all__ = ["build_manager", "build_registrar"]
