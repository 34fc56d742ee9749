"""YAML configuration parser for aidev.

This module provides parsing and validation for the optional ``aidev.yaml``
file in the project root. Every key is optional; missing keys fall back to
the defaults of the stock AI development shell.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from aidev.core.envfile import DEFAULT_ENV_FILES
from aidev.core.exceptions import ConfigError
from aidev.core.prefix import InstallPrefix
from aidev.packages.npm import DEFAULT_PACKAGES, GlobalPackage

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "aidev.yaml"

DEFAULT_API_KEYS = ("OPENAI_API_KEY",)
DEFAULT_PLACEHOLDER_MARKERS = ("your-key-here",)

KNOWN_KEYS = {
    "install_prefix",
    "env_files",
    "packages",
    "api_keys",
    "placeholder_markers",
    "permissions",
    "install_timeout",
    "lock_timeout",
}


@dataclass(frozen=True)
class BootstrapConfig:
    """Complete bootstrap configuration."""

    install_prefix: InstallPrefix = field(default_factory=InstallPrefix.from_path)
    env_files: Tuple[str, ...] = DEFAULT_ENV_FILES
    packages: Tuple[GlobalPackage, ...] = DEFAULT_PACKAGES
    api_keys: Tuple[str, ...] = DEFAULT_API_KEYS
    placeholder_markers: Tuple[str, ...] = DEFAULT_PLACEHOLDER_MARKERS
    extra_allow: Tuple[str, ...] = ()
    extra_deny: Tuple[str, ...] = ()
    install_timeout: Optional[float] = None
    lock_timeout: float = 10
    source: Optional[Path] = None


def load_config(
    project_root: Path, config_file: Optional[Path] = None
) -> BootstrapConfig:
    """
    Load bootstrap configuration for a project.

    Args:
        project_root: Project root directory
        config_file: Explicit configuration file (must exist if given)

    Returns:
        Parsed configuration (defaults if no file is present)

    Raises:
        ConfigError: If the file is missing (explicit path only) or invalid
    """
    if config_file is None:
        path = project_root / CONFIG_FILE_NAME
        if not path.exists():
            logger.debug(f"Config file not found (optional): {path}")
            return BootstrapConfig()
    else:
        path = Path(config_file)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

    logger.debug(f"Loading configuration from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}")

    if data is None:
        return BootstrapConfig(source=path)

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    return parse_config(data, source=path)


def parse_config(data: Dict[str, Any], source: Optional[Path] = None) -> BootstrapConfig:
    """Parse and validate configuration data."""
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    prefix = data.get("install_prefix")
    if prefix is not None and not isinstance(prefix, str):
        raise ConfigError("install_prefix must be a string path")

    permissions = data.get("permissions") or {}
    if not isinstance(permissions, dict):
        raise ConfigError("permissions must be a mapping with allow/deny lists")
    unknown_permissions = sorted(set(permissions) - {"allow", "deny"})
    if unknown_permissions:
        raise ConfigError(
            f"Unknown permissions key(s): {', '.join(unknown_permissions)}"
        )

    return BootstrapConfig(
        install_prefix=InstallPrefix.from_path(prefix),
        env_files=_string_list(data, "env_files", DEFAULT_ENV_FILES),
        packages=_parse_packages(data.get("packages")),
        api_keys=_string_list(data, "api_keys", DEFAULT_API_KEYS),
        placeholder_markers=_string_list(
            data, "placeholder_markers", DEFAULT_PLACEHOLDER_MARKERS
        ),
        extra_allow=_string_list(permissions, "allow", (), prefix="permissions."),
        extra_deny=_string_list(permissions, "deny", (), prefix="permissions."),
        install_timeout=_number(data, "install_timeout", None),
        lock_timeout=_number(data, "lock_timeout", 10),
        source=source,
    )


def _string_list(
    data: Dict[str, Any], key: str, default: Tuple[str, ...], prefix: str = ""
) -> Tuple[str, ...]:
    if key not in data or data[key] is None:
        return tuple(default)

    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{prefix}{key} must be a list of strings")

    return tuple(value)


def _number(data: Dict[str, Any], key: str, default: Optional[float]):
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigError(f"{key} must be a non-negative number of seconds")
    return value


def _parse_packages(data: Optional[List[Any]]) -> Tuple[GlobalPackage, ...]:
    """Parse global package definitions."""
    if data is None:
        return DEFAULT_PACKAGES

    if not isinstance(data, list):
        raise ConfigError("packages must be a list")

    packages = []
    commands = set()

    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigError(f"packages[{index}] must be a mapping")

        for field_name in ("package", "command"):
            if not entry.get(field_name):
                raise ConfigError(
                    f"packages[{index}] missing required field: {field_name}"
                )

        if entry["command"] in commands:
            raise ConfigError(f"Duplicate package command: {entry['command']}")
        commands.add(entry["command"])

        packages.append(
            GlobalPackage(
                package=str(entry["package"]),
                command=str(entry["command"]),
                name=entry.get("name"),
            )
        )

    return tuple(packages)
