"""
Permissions manifest for ``.claude/settings.json``.

The manifest holds two ordered lists of ``Tool(command:args-glob)``
patterns: ``allow`` (run without confirmation) and ``deny`` (always
blocked).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

DEFAULT_ALLOWED_COMMANDS = (
    "node",
    "npm",
    "npx",
    "yarn",
    "bun",
    "ls",
    "cp",
    "mv",
    "grep",
    "awk",
    "sed",
    "find",
    "cat",
    "echo",
    "touch",
    "mkdir",
)

DEFAULT_DENY = ("Bash(rm:-rf)",)


def command_pattern(command: str, args: str = "*", tool: str = "Bash") -> str:
    """
    Build a permission pattern.

    Example:
        >>> command_pattern("npm")
        'Bash(npm:*)'
    """
    return f"{tool}({command}:{args})"


def _merge(base: Iterable[str], extra: Iterable[str]) -> List[str]:
    merged: List[str] = []
    for pattern in list(base) + list(extra):
        if pattern not in merged:
            merged.append(pattern)
    return merged


@dataclass
class PermissionsManifest:
    """Allow/deny command patterns."""

    allow: List[str] = field(default_factory=list)
    deny: List[str] = field(default_factory=list)

    @classmethod
    def default(
        cls, extra_allow: Iterable[str] = (), extra_deny: Iterable[str] = ()
    ) -> "PermissionsManifest":
        """
        Create the default manifest, optionally extended.

        Args:
            extra_allow: Additional allow patterns appended after the defaults
            extra_deny: Additional deny patterns appended after the defaults

        Returns:
            PermissionsManifest with duplicates removed, order preserved
        """
        allow = [command_pattern(cmd) for cmd in DEFAULT_ALLOWED_COMMANDS]
        return cls(
            allow=_merge(allow, extra_allow),
            deny=_merge(DEFAULT_DENY, extra_deny),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"permissions": {"allow": list(self.allow), "deny": list(self.deny)}}

    def to_json(self) -> str:
        """Serialize as settings.json content (2-space indent, trailing newline)."""
        return json.dumps(self.to_dict(), indent=2) + "\n"
