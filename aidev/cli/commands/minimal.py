"""
Minimal command implementation.

Loads environment files and enters the minimal shell.
"""

from aidev.bootstrap import Variant
from aidev.cli.commands.session import run_session


def run(args) -> int:
    """Run the minimal command."""
    return run_session(args, Variant.MINIMAL)
