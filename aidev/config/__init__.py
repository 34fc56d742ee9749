"""
Configuration management for aidev.

Parses the optional ``aidev.yaml`` project file into a BootstrapConfig.
"""

from .settings import (
    CONFIG_FILE_NAME,
    BootstrapConfig,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "BootstrapConfig",
    "load_config",
    "parse_config",
]
