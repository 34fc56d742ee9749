"""
Environment file loading.

Reads ``KEY=VALUE`` files (``.env``, ``.env.local``) with python-dotenv and
merges them in order, so later files override earlier ones. The files are
parsed as one stream, the way ``set -a; . .env; . .env.local`` would see
them: ``${VAR}`` in a later file expands keys defined by an earlier one.
Parsing follows python-dotenv's shell-compatible rules (comments,
``export`` prefix, quoting); no further validation is performed.

Files are decoded as UTF-8 with ``surrogateescape``, so bytes that are not
valid UTF-8 pass through to the session environment unchanged.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILES = (".env", ".env.local")


@dataclass
class EnvLoadResult:
    """
    Result of loading environment files.

    Attributes:
        values: Merged variables, later files taking precedence
        loaded: Files that existed and were read, in load order
    """

    values: Dict[str, str] = field(default_factory=dict)
    loaded: List[Path] = field(default_factory=list)


def _read_text(path: Path) -> str:
    text = path.read_text(encoding="utf-8", errors="surrogateescape")
    if text and not text.endswith("\n"):
        text += "\n"
    return text


def _parse(text: str, source: str) -> Dict[str, str]:
    raw = dotenv_values(stream=io.StringIO(text))
    values = {key: value for key, value in raw.items() if value is not None}

    skipped = len(raw) - len(values)
    if skipped:
        logger.debug(f"Skipped {skipped} key(s) without a value in {source}")

    return values


def read_env_file(path: Path) -> Dict[str, str]:
    """
    Parse a single environment file.

    Keys declared without a value (no ``=``) are skipped.

    Args:
        path: Path to environment file

    Returns:
        Ordered mapping of variable names to values
    """
    return _parse(_read_text(path), str(path))


def load_env_files(
    project_root: Path, names: Sequence[str] = DEFAULT_ENV_FILES
) -> EnvLoadResult:
    """
    Load and merge environment files found in the project root.

    Args:
        project_root: Directory containing the files
        names: File names, lowest precedence first

    Returns:
        EnvLoadResult with merged values and the files that were read

    Example:
        >>> result = load_env_files(Path("."))
        >>> result.values.get("OPENAI_API_KEY")
    """
    result = EnvLoadResult()
    chunks = []

    for name in names:
        path = project_root / name
        if not path.is_file():
            logger.debug(f"Environment file not found: {path}")
            continue

        chunks.append(_read_text(path))
        result.loaded.append(path)
        logger.debug(f"Reading environment file: {path}")

    if chunks:
        sources = ", ".join(p.name for p in result.loaded)
        result.values = _parse("".join(chunks), sources)
        logger.debug(f"Loaded {len(result.values)} variable(s)")

    return result


def apply_env(environ: Mapping[str, str], values: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of ``environ`` with ``values`` exported over it."""
    env = dict(environ)
    env.update(values)
    return env
