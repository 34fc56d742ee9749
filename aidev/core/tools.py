"""
Shell tool requirements and health checks.

Each shell variant expects a set of command-line tools to be provided by
the platform. These checks report what is available on the session PATH;
installing them is left to the platform's package manager.
"""

import logging
import re
import shutil
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from packaging.version import InvalidVersion, Version

from aidev.core.status import query_version

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"(\d+(?:\.\d+)*)")


@dataclass(frozen=True)
class ToolRequirement:
    """
    A command-line tool the shell expects.

    Attributes:
        name: Display name
        command: Executable name
        required: Whether absence fails the check (otherwise a warning)
        min_version: Minimum version, checked against ``--version`` output
    """

    name: str
    command: str
    required: bool = False
    min_version: Optional[str] = None


@dataclass
class CheckResult:
    """Result of a health check."""

    name: str
    passed: bool
    message: str
    required: bool = False
    fix_command: Optional[str] = None


DEV_TOOLS: Tuple[ToolRequirement, ...] = (
    ToolRequirement("Node.js", "node", required=True, min_version="22"),
    ToolRequirement("npm", "npm", required=True),
    ToolRequirement("Bun", "bun"),
    ToolRequirement("Yarn", "yarn"),
    ToolRequirement("Git", "git", required=True),
    ToolRequirement("pre-commit", "pre-commit"),
    ToolRequirement("GitHub CLI", "gh"),
    ToolRequirement("ripgrep", "rg"),
    ToolRequirement("jq", "jq"),
    ToolRequirement("ShellCheck", "shellcheck"),
    ToolRequirement("GNU Make", "make"),
)

MINIMAL_TOOLS: Tuple[ToolRequirement, ...] = (
    ToolRequirement("Node.js", "node", required=True),
    ToolRequirement("Git", "git", required=True),
    ToolRequirement("ripgrep", "rg"),
)

VARIANT_TOOLS = {"dev": DEV_TOOLS, "minimal": MINIMAL_TOOLS}


def parse_version(output: str) -> Optional[Version]:
    """
    Extract the first version number from tool output.

    Example:
        >>> parse_version("v22.3.0")
        <Version('22.3.0')>
    """
    match = _VERSION_RE.search(output or "")
    if not match:
        return None
    try:
        return Version(match.group(1))
    except InvalidVersion:
        return None


def check_tool(tool: ToolRequirement, env: Mapping[str, str]) -> CheckResult:
    """
    Check one tool on the session PATH.

    Args:
        tool: Requirement to check
        env: Session environment

    Returns:
        CheckResult for the tool
    """
    path = shutil.which(tool.command, path=env.get("PATH", ""))
    if path is None:
        return CheckResult(
            name=tool.name,
            passed=False,
            message=f"{tool.command} not found in PATH",
            required=tool.required,
            fix_command=f"Install {tool.name} with your platform package manager",
        )

    if tool.min_version is None:
        return CheckResult(
            name=tool.name,
            passed=True,
            message=f"found at {path}",
            required=tool.required,
        )

    output = query_version(tool.command, env)
    found = parse_version(output) if output else None
    if found is None:
        logger.debug(f"Could not determine {tool.command} version from: {output!r}")
        return CheckResult(
            name=tool.name,
            passed=True,
            message=f"found at {path} (version unknown)",
            required=tool.required,
        )

    if found < Version(tool.min_version):
        return CheckResult(
            name=tool.name,
            passed=False,
            message=f"{tool.name} {found} is too old (need {tool.min_version}+)",
            required=tool.required,
            fix_command=f"Upgrade {tool.name} to {tool.min_version} or newer",
        )

    return CheckResult(
        name=tool.name,
        passed=True,
        message=f"{tool.name} {found} found at {path}",
        required=tool.required,
    )


def check_tools(variant: str, env: Mapping[str, str]) -> List[CheckResult]:
    """Check every tool expected by a shell variant."""
    return [check_tool(tool, env) for tool in VARIANT_TOOLS[variant]]
