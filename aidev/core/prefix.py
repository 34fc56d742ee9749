"""
Install prefix configuration for globally installed command-line tools.

The prefix is an explicit object handed to each bootstrap step instead of
mutating the process environment. ``apply()`` returns a new environment
mapping with ``NPM_CONFIG_PREFIX`` exported and ``<root>/bin`` prepended to
``PATH``.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

PREFIX_ENV_VAR = "NPM_CONFIG_PREFIX"


def default_install_root() -> Path:
    """
    Get the default per-user install root.

    Returns:
        Path to ~/.npm-global
    """
    return Path.home() / ".npm-global"


@dataclass(frozen=True)
class InstallPrefix:
    """
    Per-user install prefix for global npm packages.

    Attributes:
        root: Install root directory (npm ``prefix``)
    """

    root: Path

    @classmethod
    def from_path(cls, path: Optional[Union[str, Path]] = None) -> "InstallPrefix":
        """
        Create prefix from a user-supplied path, expanding ``~``.

        Args:
            path: Install root (default: ~/.npm-global)

        Returns:
            InstallPrefix instance
        """
        if path is None:
            return cls(default_install_root())
        return cls(Path(path).expanduser())

    @property
    def bin_dir(self) -> Path:
        """Directory holding executables installed under this prefix."""
        return self.root / "bin"

    def binary(self, command: str) -> Path:
        """Expected location of ``command`` under this prefix."""
        return self.bin_dir / command

    def has_executable(self, command: str) -> bool:
        """Check whether ``command`` is a regular executable file in bin_dir."""
        path = self.binary(command)
        return path.is_file() and os.access(path, os.X_OK)

    def ensure(self) -> None:
        """
        Create the install root and its bin directory if missing.

        Raises:
            OSError: If the directories cannot be created
        """
        self.bin_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured install prefix exists: {self.root}")

    def apply(self, environ: Mapping[str, str]) -> Dict[str, str]:
        """
        Return a copy of ``environ`` configured for this prefix.

        Args:
            environ: Base environment

        Returns:
            New environment with NPM_CONFIG_PREFIX set and bin_dir first on PATH
        """
        env = dict(environ)
        env[PREFIX_ENV_VAR] = str(self.root)

        bin_dir = str(self.bin_dir)
        current = env.get("PATH", "")
        entries = [p for p in current.split(os.pathsep) if p]
        if entries and entries[0] == bin_dir:
            env["PATH"] = current
        else:
            env["PATH"] = os.pathsep.join([bin_dir] + entries)

        return env
