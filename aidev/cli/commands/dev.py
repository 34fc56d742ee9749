"""
Dev command implementation.

Bootstraps and enters the full AI development shell.
"""

import logging

from aidev.bootstrap import Variant
from aidev.cli.commands.session import run_session

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the dev command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.debug("Entering dev environment")
    return run_session(args, Variant.DEV)
