"""
Session status reporting.

Queries installed tool versions and checks API-key variables without ever
exposing their values. Every external call is guarded: a missing or failing
command yields ``None`` instead of an exception.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


def query_version(
    command: str, env: Mapping[str, str], timeout: Optional[float] = 10
) -> Optional[str]:
    """
    Read a tool's ``--version`` output.

    Args:
        command: Executable name, resolved on the session PATH
        env: Session environment
        timeout: Seconds to wait for the tool

    Returns:
        First line of the tool's output, or None if absent or failing
    """
    executable = shutil.which(command, path=env.get("PATH", ""))
    if executable is None:
        logger.debug(f"{command} not found on PATH")
        return None

    try:
        result = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
            env=dict(env),
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"Version query failed for {command}: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"{command} --version exited with {result.returncode}")
        return None

    output = (result.stdout or "").strip()
    return output.splitlines()[0] if output else ""


class KeyStatus(str, Enum):
    """State of an expected API-key variable."""

    MISSING = "missing"
    PLACEHOLDER = "placeholder"
    SET = "set"


@dataclass(frozen=True)
class KeyCheck:
    """Result of checking one API-key variable."""

    name: str
    status: KeyStatus

    @property
    def message(self) -> str:
        if self.status == KeyStatus.MISSING:
            return f"⚠️ Warning: {self.name} not set in .env or .env.local"
        if self.status == KeyStatus.PLACEHOLDER:
            return f"⚠️ Warning: {self.name} appears to be a placeholder value"
        return f"✅ {self.name} is set"


def check_api_key(
    name: str,
    env: Mapping[str, str],
    placeholder_markers: Sequence[str] = ("your-key-here",),
) -> KeyCheck:
    """
    Classify an API-key variable as missing, placeholder, or set.

    Example:
        >>> check_api_key("OPENAI_API_KEY", {"OPENAI_API_KEY": "sk-your-key-here"})
        KeyCheck(name='OPENAI_API_KEY', status=<KeyStatus.PLACEHOLDER: 'placeholder'>)
    """
    value = env.get(name, "")

    if not value:
        return KeyCheck(name, KeyStatus.MISSING)
    if any(marker in value for marker in placeholder_markers):
        return KeyCheck(name, KeyStatus.PLACEHOLDER)
    return KeyCheck(name, KeyStatus.SET)
