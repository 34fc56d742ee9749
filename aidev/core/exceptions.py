"""
Centralized exception hierarchy for aidev.

This module defines all custom exceptions used across the codebase
to provide clear exception semantics.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class AidevError(Exception):
    """Base exception for all aidev errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(AidevError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Scaffold Exceptions
# ============================================================================


class ScaffoldError(AidevError):
    """Raised when a scaffold definition cannot be rendered."""

    pass


# ============================================================================
# Installer Exceptions
# ============================================================================


class InstallerError(AidevError):
    """Base exception for package installer errors."""

    pass


class InstallerNotFoundError(InstallerError):
    """Raised when the package manager executable is not on PATH."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"Package manager not found on PATH: {executable}")


# ============================================================================
# Shell Exceptions
# ============================================================================


class ShellLaunchError(AidevError):
    """Raised when the interactive shell cannot be started."""

    pass
