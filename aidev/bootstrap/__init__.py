"""
Bootstrap pipeline for aidev shells.

Runs the ordered setup steps and hands the resulting session environment
to an interactive shell or an activation script.
"""

from .bootstrapper import Bootstrapper, BootstrapReport, Variant
from .shell import enter_shell, render_activation, resolve_shell

__all__ = [
    "Bootstrapper",
    "BootstrapReport",
    "Variant",
    "enter_shell",
    "render_activation",
    "resolve_shell",
]
