"""
Shell entry for a bootstrapped session.

A child process cannot change its parent shell's environment, so a session
is entered either by replacing this process with an interactive shell that
inherits the session environment, or by printing an activation script for
``eval``.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from aidev.core.exceptions import ShellLaunchError
from aidev.core.templates import render_template

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"


def resolve_shell(env: Mapping[str, str]) -> str:
    """User's login shell from ``$SHELL``, falling back to /bin/sh."""
    return env.get("SHELL") or DEFAULT_SHELL


def render_activation(
    exports: Mapping[str, str], variant: str, project_root: Path
) -> str:
    """
    Render an activation script exporting ``exports``.

    Values are shell-quoted; names are emitted in sorted order.

    Args:
        exports: Variables to export
        variant: Shell variant name (for the header comment)
        project_root: Project directory (for the header comment)

    Returns:
        Script text suitable for ``eval``
    """
    return render_template(
        "activate.sh.j2",
        exports=sorted(exports.items()),
        variant=variant,
        project_root=str(project_root),
    )


def enter_shell(
    env: Mapping[str, str], project_root: Path, shell: Optional[str] = None
) -> None:
    """
    Replace the current process with an interactive shell.

    Does not return on success.

    Raises:
        ShellLaunchError: If the shell cannot be executed
    """
    shell = shell or resolve_shell(env)
    logger.debug(f"Entering shell {shell} in {project_root}")

    try:
        os.chdir(project_root)
        os.execvpe(shell, [shell], dict(env))
    except OSError as e:
        raise ShellLaunchError(f"Failed to start shell {shell}: {e}") from e
