"""
npm global package management.

Installs or updates globally installed CLI packages under a per-user
prefix. Every call is best-effort: output is captured and discarded, and
the outcome is returned as an ``InstallResult`` instead of raising, so the
caller decides to log and continue.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Mapping, Optional

from aidev.core.exceptions import InstallerNotFoundError
from aidev.core.prefix import InstallPrefix

logger = logging.getLogger(__name__)

QUIET_FLAGS = ("--quiet", "--no-fund", "--no-audit")


@dataclass(frozen=True)
class GlobalPackage:
    """
    A globally installed npm package and the command it provides.

    Attributes:
        package: npm package identifier (e.g., '@openai/codex')
        command: Executable name the package installs (e.g., 'codex')
        name: Display name for status output (default: command)
    """

    package: str
    command: str
    name: Optional[str] = None

    def __post_init__(self):
        """Validate package definition."""
        if not self.package:
            raise ValueError("Package identifier cannot be empty")
        if not self.command:
            raise ValueError("Command name cannot be empty")

    @property
    def display_name(self) -> str:
        return self.name or self.command


DEFAULT_PACKAGES = (
    GlobalPackage("@anthropic-ai/claude-code", "claude", "Claude Code"),
    GlobalPackage("@openai/codex", "codex", "Codex"),
)


class InstallOutcome(str, Enum):
    """Outcome of ensuring a global package."""

    INSTALLED = "installed"
    UPDATED = "updated"
    UPDATE_FAILED = "update_failed"
    FAILED = "failed"
    PRESENT = "present"
    NPM_MISSING = "npm_missing"
    SKIPPED = "skipped"


@dataclass
class InstallResult:
    """Result of an install or update attempt."""

    package: GlobalPackage
    outcome: InstallOutcome
    returncode: Optional[int] = None
    message: str = ""

    @property
    def attempted_install(self) -> bool:
        """Whether a fresh install was attempted (success or failure)."""
        return self.outcome in (InstallOutcome.INSTALLED, InstallOutcome.FAILED)


class NpmInstaller:
    """
    Install and update global npm packages under an install prefix.

    Attributes:
        prefix: Install prefix packages are placed under
        env: Session environment used to resolve and run npm
        timeout: Optional timeout in seconds for each npm call
    """

    def __init__(
        self,
        prefix: InstallPrefix,
        env: Mapping[str, str],
        timeout: Optional[float] = None,
        executable: str = "npm",
    ):
        self.prefix = prefix
        self.env = dict(env)
        self.timeout = timeout
        self.executable = executable

    def which(self, command: str) -> Optional[str]:
        """Resolve ``command`` on the session PATH."""
        return shutil.which(command, path=self.env.get("PATH", ""))

    def _npm(self) -> str:
        npm = self.which(self.executable)
        if npm is None:
            raise InstallerNotFoundError(self.executable)
        return npm

    def _run(self, args: List[str]) -> int:
        """
        Run npm with output discarded.

        Returns:
            npm exit code, or -1 if it could not be run or timed out

        Raises:
            InstallerNotFoundError: If npm is not on the session PATH
        """
        cmd = [self._npm()] + args
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                env=self.env,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"npm timed out after {self.timeout}s: {' '.join(args)}")
            return -1
        except OSError as e:
            logger.debug(f"Failed to run npm: {e}")
            return -1

        logger.debug(f"npm exited with {result.returncode}")
        return result.returncode

    def update(self, package: GlobalPackage) -> InstallResult:
        """Quietly update an installed package."""
        code = self._run(["update", "-g", package.package, *QUIET_FLAGS])
        outcome = InstallOutcome.UPDATED if code == 0 else InstallOutcome.UPDATE_FAILED
        return InstallResult(package, outcome, returncode=code)

    def install(self, package: GlobalPackage) -> InstallResult:
        """Quietly install a package."""
        code = self._run(["install", "-g", package.package, *QUIET_FLAGS])
        if code == 0:
            return InstallResult(
                package,
                InstallOutcome.INSTALLED,
                returncode=code,
                message=f"✅ {package.command} installed successfully",
            )
        return InstallResult(
            package,
            InstallOutcome.FAILED,
            returncode=code,
            message=f"⚠️ Failed to install {package.command}",
        )

    def ensure(
        self, package: GlobalPackage, notify: Optional[Callable[[str], None]] = None
    ) -> InstallResult:
        """
        Install or update a package depending on where its command lives.

        - Executable under the prefix: update only, never a fresh install.
        - Not found anywhere on PATH: install.
        - Found elsewhere on PATH: leave alone.

        Args:
            package: Package to ensure
            notify: Called with a status line before a fresh install starts

        Returns:
            InstallResult describing what happened
        """
        installed = self.prefix.has_executable(package.command)
        try:
            if installed:
                return self.update(package)

            if self.which(package.command) is None:
                if notify is not None:
                    notify(f"{package.package} not found. Installing quietly...")
                return self.install(package)
        except InstallerNotFoundError as e:
            logger.debug(str(e))
            message = "" if installed else f"⚠️ Failed to install {package.command}"
            return InstallResult(package, InstallOutcome.NPM_MISSING, message=message)

        logger.debug(f"{package.command} found outside install prefix, skipping")
        return InstallResult(package, InstallOutcome.PRESENT)

    def set_prefix(self) -> bool:
        """
        Persist the install prefix in the user's npm configuration.

        Returns:
            True if npm accepted the setting
        """
        try:
            code = self._run(["config", "set", "prefix", str(self.prefix.root)])
        except InstallerNotFoundError as e:
            logger.debug(str(e))
            return False
        return code == 0
