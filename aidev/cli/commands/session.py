"""
Shared flow for the shell-entering commands (dev, minimal).

Bootstraps the session, then either reports only (--no-shell), prints an
activation script (--print-env), or replaces the process with a shell.
"""

import logging
import sys
from pathlib import Path

from aidev.bootstrap import Bootstrapper, Variant, enter_shell, render_activation
from aidev.cli.utils import print_error, resolve_project_root
from aidev.config.settings import load_config
from aidev.core.exceptions import AidevError, ConfigError

logger = logging.getLogger(__name__)


def run_session(args, variant: Variant) -> int:
    """
    Bootstrap a shell variant and enter it.

    Args:
        args: Parsed command-line arguments
        variant: Shell variant to bootstrap

    Returns:
        Exit code (0 for success, 1 for error); does not return when a
        shell is started
    """
    project_root = resolve_project_root(Path(args.project_root))
    logger.debug(f"Arguments: {args}")

    if not project_root.is_dir():
        print_error("Project root is not a directory", str(project_root))
        return 1

    try:
        config = load_config(project_root, args.config)
    except ConfigError as e:
        logger.error(f"Failed to load configuration: {e}")
        print_error("Failed to load configuration", str(e))
        return 1

    print_env = getattr(args, "print_env", False)

    bootstrapper = Bootstrapper(
        project_root,
        config=config,
        out=sys.stderr if print_env else None,
        skip_install=getattr(args, "skip_install", False),
    )
    try:
        report = bootstrapper.run(variant)
    except (AidevError, OSError) as e:
        logger.debug(f"Bootstrap failed: {e!r}")
        print_error("Failed to bootstrap environment", str(e))
        return 1

    if print_env:
        sys.stdout.write(
            render_activation(report.exported(), variant.value, project_root)
        )
        return 0

    if getattr(args, "no_shell", False):
        return 0

    try:
        enter_shell(report.env, project_root)
    except AidevError as e:
        print_error("Failed to start shell", str(e))
        return 1
    return 0
