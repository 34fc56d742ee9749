"""
Scaffold file management.

A scaffold is a project file created with default content only when it is
absent and never touched again, so user edits always survive a re-run.
The one exception is ``IgnoreEntry``, which appends a single missing line
to an ignore file.

Scaffolds are typed definitions (path, content generator, messages) that
the bootstrapper iterates uniformly:

    for scaffold in default_scaffolds():
        result = scaffold.apply(project_root)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from aidev.core.exceptions import ScaffoldError
from aidev.core.permissions import PermissionsManifest
from aidev.core.templates import render_template

logger = logging.getLogger(__name__)

Content = Union[str, bytes]


class ScaffoldAction(str, Enum):
    """What applying a scaffold did."""

    CREATED = "created"
    EXISTS = "exists"
    APPENDED = "appended"
    UNCHANGED = "unchanged"


@dataclass
class ScaffoldResult:
    """
    Result of applying a scaffold.

    Attributes:
        path: Absolute path of the file
        action: What happened
        messages: Status lines to show the user
    """

    path: Path
    action: ScaffoldAction
    messages: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.action in (ScaffoldAction.CREATED, ScaffoldAction.APPENDED)


@dataclass(frozen=True)
class ScaffoldFile:
    """
    A file created from a content generator when absent.

    Attributes:
        relative_path: Path relative to the project root
        render: Content generator, called with the project root
        announce: Line shown before the file is created
        notices: Lines shown after the file is created
    """

    relative_path: str
    render: Callable[[Path], Content]
    announce: str = ""
    notices: Tuple[str, ...] = ()

    def apply(self, project_root: Path) -> ScaffoldResult:
        """
        Create the file if it does not exist.

        The parent directory is always ensured. The file is opened in
        exclusive-create mode so an existing file is never truncated.

        Raises:
            OSError: If the directory or file cannot be created
            ScaffoldError: If the content generator fails
        """
        path = project_root / self.relative_path
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.exists():
            logger.debug(f"Scaffold exists, leaving untouched: {path}")
            return ScaffoldResult(path, ScaffoldAction.EXISTS)

        content = self.render(project_root)
        data = content.encode("utf-8") if isinstance(content, str) else content

        try:
            with open(path, "xb") as f:
                f.write(data)
        except FileExistsError:
            logger.debug(f"Scaffold created concurrently: {path}")
            return ScaffoldResult(path, ScaffoldAction.EXISTS)

        logger.debug(f"Created scaffold: {path} ({len(data)} bytes)")
        messages = ([self.announce] if self.announce else []) + list(self.notices)
        return ScaffoldResult(path, ScaffoldAction.CREATED, messages)


@dataclass(frozen=True)
class IgnoreEntry:
    """
    A line that must be present in an ignore file.

    Attributes:
        line: Exact pattern line (e.g., '.env.local')
        relative_path: Ignore file relative to the project root
    """

    line: str
    relative_path: str = ".gitignore"

    def apply(self, project_root: Path) -> ScaffoldResult:
        """
        Append the line if missing, or create the file with just that line.

        Lines are compared as bytes, so the file may use any encoding.

        Raises:
            OSError: If the file cannot be read or written
        """
        path = project_root / self.relative_path
        entry = self.line.encode("utf-8")

        if not path.exists():
            path.write_bytes(entry + b"\n")
            logger.debug(f"Created {path} with {self.line}")
            return ScaffoldResult(path, ScaffoldAction.CREATED)

        existing = path.read_bytes()
        if entry in existing.splitlines():
            logger.debug(f"{path} already contains {self.line}")
            return ScaffoldResult(path, ScaffoldAction.UNCHANGED)

        separator = b"" if not existing or existing.endswith(b"\n") else b"\n"
        with open(path, "ab") as f:
            f.write(separator + entry + b"\n")

        logger.debug(f"Appended {self.line} to {path}")
        return ScaffoldResult(path, ScaffoldAction.APPENDED)


# ============================================================================
# Default scaffolds
# ============================================================================


def placeholder_for(key: str) -> str:
    """Placeholder value written for ``key`` in a fresh .env."""
    if key.startswith("OPENAI"):
        return "sk-your-key-here"
    return "your-key-here"


def render_env_template(api_keys: Sequence[str]) -> str:
    return render_template(
        "env.j2", api_keys=[(key, placeholder_for(key)) for key in api_keys]
    )


def copy_file(source_name: str) -> Callable[[Path], bytes]:
    """Content generator that copies another project file verbatim."""

    def render(project_root: Path) -> bytes:
        source = project_root / source_name
        if not source.is_file():
            raise ScaffoldError(f"Cannot copy {source_name}: file not found")
        return source.read_bytes()

    return render


def default_scaffolds(
    api_keys: Sequence[str] = ("OPENAI_API_KEY",),
    permissions: Optional[PermissionsManifest] = None,
    env_file: str = ".env",
    local_env_file: str = ".env.local",
) -> List[Union[ScaffoldFile, IgnoreEntry]]:
    """
    Build the ordered list of project scaffolds.

    Args:
        api_keys: Keys given placeholders in the .env template
        permissions: Manifest written to .claude/settings.json
        env_file: Base environment file name
        local_env_file: Override environment file name (git-ignored)

    Returns:
        Scaffold steps in the order they must be applied
    """
    if permissions is None:
        permissions = PermissionsManifest.default()

    env_content = render_env_template(api_keys)
    agents_content = render_template("AGENTS.md.j2")
    claude_content = render_template("CLAUDE.md.j2", agents_file="AGENTS.md")
    settings_content = permissions.to_json()

    scaffolds: List[Union[ScaffoldFile, IgnoreEntry]] = [
        ScaffoldFile(
            env_file,
            lambda root: env_content,
            announce=f"Creating template {env_file} file...",
        )
    ]

    if local_env_file and local_env_file != env_file:
        scaffolds.append(
            ScaffoldFile(
                local_env_file,
                copy_file(env_file),
                announce=f"Creating {local_env_file} from {env_file}...",
                notices=(
                    f"Please edit {local_env_file} with your actual API keys",
                    f"Note: {local_env_file} will override values in {env_file}",
                ),
            )
        )
        scaffolds.append(IgnoreEntry(local_env_file))

    scaffolds += [
        ScaffoldFile(
            "AGENTS.md",
            lambda root: agents_content,
            announce="Creating AGENTS.md configuration file...",
        ),
        ScaffoldFile(
            "CLAUDE.md",
            lambda root: claude_content,
            announce="Creating CLAUDE.md file...",
        ),
        ScaffoldFile(
            ".claude/settings.json",
            lambda root: settings_content,
            announce="Creating .claude/settings.json configuration file...",
        ),
    ]

    return scaffolds
