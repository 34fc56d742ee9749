"""
Core functionality for aidev.

This package contains the foundational modules that the bootstrap pipeline
depends on.
"""

from .envfile import EnvLoadResult, apply_env, load_env_files, read_env_file
from .exceptions import (
    AidevError,
    ConfigError,
    InstallerError,
    InstallerNotFoundError,
    ScaffoldError,
    ShellLaunchError,
)
from .locking import LockManager, LockTimeout, get_aidev_home
from .output import safe_print
from .permissions import PermissionsManifest, command_pattern
from .prefix import InstallPrefix, default_install_root
from .scaffold import (
    IgnoreEntry,
    ScaffoldAction,
    ScaffoldFile,
    ScaffoldResult,
    default_scaffolds,
)
from .status import KeyCheck, KeyStatus, check_api_key, query_version

__all__ = [
    "EnvLoadResult",
    "apply_env",
    "load_env_files",
    "read_env_file",
    "AidevError",
    "ConfigError",
    "InstallerError",
    "InstallerNotFoundError",
    "ScaffoldError",
    "ShellLaunchError",
    "LockManager",
    "LockTimeout",
    "get_aidev_home",
    "safe_print",
    "PermissionsManifest",
    "command_pattern",
    "InstallPrefix",
    "default_install_root",
    "IgnoreEntry",
    "ScaffoldAction",
    "ScaffoldFile",
    "ScaffoldResult",
    "default_scaffolds",
    "KeyCheck",
    "KeyStatus",
    "check_api_key",
    "query_version",
]
