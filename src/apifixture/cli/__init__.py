"""
apifixture CLI package.

Commands are auto-discovered from domain subfolders (fixture/, module/,
config/); each command module exposes SUMMARY, register_args() and main().
"""
from ._output import OutputFormatter
from ._args import add_base_dir_flag, add_json_flag, add_repo_root_flag
from ._utils import get_repo_root

__all__ = [
    "OutputFormatter",
    "add_base_dir_flag",
    "add_json_flag",
    "add_repo_root_flag",
    "get_repo_root",
]
