from .fixtures import FixturesConfig
from .logging import LoggingConfig
from .modules import ModulesConfig
from .reinitialize import ReinitializeConfig

__all__ = ["FixturesConfig", "LoggingConfig", "ModulesConfig", "ReinitializeConfig"]
