"""Fixture lifecycle: declarations, references, resolution and the manager."""
from .environment import EnvironmentReinitializer
from .factory import build_manager, build_registrar
from .manager import FixtureLifecycleManager
from .metadata import AnnotationMetadataProvider, MetadataCache, api_data_fixture
from .modules import ComponentRegistrar
from .protocols import CacheInvalidator, MetadataProvider, ModulePathResolver, ProcessReinitializer
from .references import CallableReference, FixtureReference, PathReference, describe
from .resolver import FixturePathResolver
from .subject import FixtureSubject, as_subject

__all__ = [
    "AnnotationMetadataProvider",
    "CacheInvalidator",
    "CallableReference",
    "ComponentRegistrar",
    "EnvironmentReinitializer",
    "FixtureLifecycleManager",
    "FixturePathResolver",
    "FixtureReference",
    "FixtureSubject",
    "MetadataCache",
    "MetadataProvider",
    "ModulePathResolver",
    "PathReference",
    "ProcessReinitializer",
    "api_data_fixture",
    "as_subject",
    "build_manager",
    "build_registrar",
    "describe",
]
