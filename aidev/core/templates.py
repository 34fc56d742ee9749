"""
Template rendering for scaffold files and activation scripts.

Templates live in the ``aidev/templates`` package directory and are rendered
with Jinja2.
"""

import logging
import shlex
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from aidev.core.exceptions import ScaffoldError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_environment: Optional[Environment] = None


def get_environment() -> Environment:
    """
    Get the shared Jinja2 environment, creating it on first use.

    Returns:
        Jinja2 Environment instance

    Raises:
        ScaffoldError: If the template directory is missing
    """
    global _environment

    if _environment is None:
        if not TEMPLATE_DIR.exists():
            raise ScaffoldError(f"Template directory not found: {TEMPLATE_DIR}")

        _environment = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        _environment.filters["shell_quote"] = shlex.quote
        logger.debug(f"Jinja2 templates initialized from: {TEMPLATE_DIR}")

    return _environment


def render_template(template_name: str, **context: Any) -> str:
    """
    Render a template by name.

    Args:
        template_name: Template file name (e.g., 'AGENTS.md.j2')
        **context: Template variables

    Returns:
        Rendered text

    Raises:
        ScaffoldError: If rendering fails
    """
    try:
        template = get_environment().get_template(template_name)
        return template.render(**context)
    except TemplateError as e:
        raise ScaffoldError(f"Failed to render template {template_name}: {e}") from e
