"""
Global package management for aidev.

Installs and updates the AI-assistant CLIs under the per-user install prefix.
"""

from .npm import (
    DEFAULT_PACKAGES,
    GlobalPackage,
    InstallOutcome,
    InstallResult,
    NpmInstaller,
)

__all__ = [
    "DEFAULT_PACKAGES",
    "GlobalPackage",
    "InstallOutcome",
    "InstallResult",
    "NpmInstaller",
]
