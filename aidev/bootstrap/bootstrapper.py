"""
Environment bootstrapper.

Brings a project directory and a shell session environment to a ready
state for AI-assisted development. Steps run strictly in order, once per
shell entry, and none of them is fatal to the session:

    dev:     prefix -> env files -> scaffolds -> global tools
             -> persist prefix -> status
    minimal: banner -> env files

The session environment is an explicit dictionary threaded through the
steps; ``os.environ`` is never modified.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional, TextIO

from aidev.config.settings import BootstrapConfig
from aidev.core.envfile import apply_env, load_env_files
from aidev.core.locking import LockManager
from aidev.core.output import safe_print
from aidev.core.permissions import PermissionsManifest
from aidev.core.scaffold import ScaffoldResult, default_scaffolds
from aidev.core.status import KeyCheck, check_api_key, query_version
from aidev.packages.npm import InstallOutcome, InstallResult, NpmInstaller

logger = logging.getLogger(__name__)


class Variant(str, Enum):
    """Shell variant."""

    DEV = "dev"
    MINIMAL = "minimal"


@dataclass
class BootstrapReport:
    """
    Everything a bootstrap run did.

    Attributes:
        variant: Variant that ran
        base_env: Environment the run started from
        env: Session environment handed to the shell
        loaded_env_files: Environment files that were read
        scaffolds: Scaffold results in application order
        installs: Global package results in configuration order
        prefix_persisted: Whether npm accepted the prefix (None if not attempted)
        versions: Reported version per command (None if not installed)
        key_checks: API-key check results
    """

    variant: Variant
    base_env: Dict[str, str]
    env: Dict[str, str]
    loaded_env_files: List[Path] = field(default_factory=list)
    scaffolds: List[ScaffoldResult] = field(default_factory=list)
    installs: List[InstallResult] = field(default_factory=list)
    prefix_persisted: Optional[bool] = None
    versions: Dict[str, Optional[str]] = field(default_factory=dict)
    key_checks: List[KeyCheck] = field(default_factory=list)

    def exported(self) -> Dict[str, str]:
        """Variables whose value differs from the starting environment."""
        return {
            name: value
            for name, value in self.env.items()
            if self.base_env.get(name) != value
        }


class Bootstrapper:
    """
    Run the bootstrap steps for a project.

    Attributes:
        project_root: Project directory scaffolds are created in
        config: Bootstrap configuration
        skip_install: Record packages as skipped instead of calling npm
    """

    def __init__(
        self,
        project_root: Path,
        config: Optional[BootstrapConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
        lock_manager: Optional[LockManager] = None,
        out: Optional[TextIO] = None,
        skip_install: bool = False,
    ):
        self.project_root = Path(project_root).resolve()
        self.config = config or BootstrapConfig()
        self.base_env = dict(os.environ if environ is None else environ)
        self.skip_install = skip_install
        self._lock_manager = lock_manager
        self._out = out

    def _emit(self, message: str = "") -> None:
        safe_print(message, file=self._out or sys.stdout)

    def run(self, variant: Variant) -> BootstrapReport:
        """Run the steps for ``variant``."""
        if Variant(variant) == Variant.MINIMAL:
            return self.run_minimal()
        return self.run_dev()

    def run_dev(self) -> BootstrapReport:
        """
        Run the full development bootstrap.

        Returns:
            BootstrapReport with the final session environment

        Raises:
            OSError: If a directory or scaffold file cannot be created
            LockTimeout: If another session holds the project lock too long
        """
        logger.debug(f"Bootstrapping dev environment in {self.project_root}")
        report = BootstrapReport(
            variant=Variant.DEV, base_env=self.base_env, env=dict(self.base_env)
        )

        report.env = self.configure_prefix(report.env)
        report.env = self.load_env(report, announce=True)
        report.scaffolds = self.scaffold()
        report.installs = self.install_tools(report.env)
        report.prefix_persisted = self.persist_prefix(report.env)
        self.report_status(report)

        return report

    def run_minimal(self) -> BootstrapReport:
        """Load environment files only and print a short banner."""
        logger.debug(f"Bootstrapping minimal environment in {self.project_root}")
        report = BootstrapReport(
            variant=Variant.MINIMAL, base_env=self.base_env, env=dict(self.base_env)
        )

        self._emit("Minimal development environment loaded")
        report.env = self.load_env(report, announce=False)

        return report

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def configure_prefix(self, env: Mapping[str, str]) -> Dict[str, str]:
        """Create the install prefix and expose it on the session PATH."""
        prefix = self.config.install_prefix
        prefix.ensure()
        return prefix.apply(env)

    def load_env(self, report: BootstrapReport, announce: bool) -> Dict[str, str]:
        """Export env file variables into the session environment."""
        result = load_env_files(self.project_root, self.config.env_files)

        if announce:
            for index, path in enumerate(result.loaded):
                if index == 0:
                    self._emit(f"Loading environment variables from {path.name}...")
                else:
                    self._emit(
                        f"Loading environment variables from {path.name} "
                        f"(overriding {result.loaded[0].name})..."
                    )

        report.loaded_env_files = result.loaded
        return apply_env(report.env, result.values)

    def scaffold(self) -> List[ScaffoldResult]:
        """Create missing scaffold files under the project lock."""
        env_files = self.config.env_files
        permissions = PermissionsManifest.default(
            self.config.extra_allow, self.config.extra_deny
        )
        scaffolds = default_scaffolds(
            api_keys=self.config.api_keys,
            permissions=permissions,
            env_file=env_files[0] if env_files else ".env",
            local_env_file=env_files[-1] if env_files else ".env.local",
        )

        lock_manager = self._lock_manager or LockManager()
        results = []

        with lock_manager.project_lock(
            self.project_root, timeout=self.config.lock_timeout
        ):
            for scaffold in scaffolds:
                result = scaffold.apply(self.project_root)
                for message in result.messages:
                    self._emit(message)
                logger.debug(f"{result.path.name}: {result.action.value}")
                results.append(result)

        return results

    def install_tools(self, env: Mapping[str, str]) -> List[InstallResult]:
        """Install or update each configured global package."""
        if self.skip_install:
            logger.debug("Skipping global package installation")
            return [
                InstallResult(package, InstallOutcome.SKIPPED)
                for package in self.config.packages
            ]

        installer = NpmInstaller(
            self.config.install_prefix, env, timeout=self.config.install_timeout
        )
        results = []

        for package in self.config.packages:
            result = installer.ensure(package, notify=self._emit)
            if result.message:
                self._emit(result.message)
            logger.debug(f"{package.package}: {result.outcome.value}")
            results.append(result)

        return results

    def persist_prefix(self, env: Mapping[str, str]) -> Optional[bool]:
        """Store the install prefix in the user's npm configuration."""
        if self.skip_install:
            return None

        installer = NpmInstaller(
            self.config.install_prefix, env, timeout=self.config.install_timeout
        )
        persisted = installer.set_prefix()
        if not persisted:
            logger.debug("Could not persist npm prefix")
        return persisted

    def report_status(self, report: BootstrapReport) -> None:
        """Print the banner, tool versions, and API-key checks."""
        env = report.env

        self._emit("AI Development Environment Ready")
        self._emit()
        self._emit("AI Assistants:")

        for package in self.config.packages:
            version = query_version(package.command, env)
            report.versions[package.command] = version
            shown = version if version is not None else "not installed"
            self._emit(f"- {package.display_name}: {shown}")

        self._emit()

        for key in self.config.api_keys:
            check = check_api_key(key, env, self.config.placeholder_markers)
            report.key_checks.append(check)
            self._emit(check.message)

        self._emit("Environment ready!")
