"""Configuration: layered YAML loading, caching and domain accessors."""
from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, register_cache_clearer
from .manager import ConfigManager
from .domains import FixturesConfig, LoggingConfig, ModulesConfig, ReinitializeConfig

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "FixturesConfig",
    "LoggingConfig",
    "ModulesConfig",
    "ReinitializeConfig",
    "clear_all_caches",
    "get_cached_config",
    "register_cache_clearer",
]
