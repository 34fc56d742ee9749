"""
Pytest configuration and shared fixtures for aidev tests.
"""

import io
from pathlib import Path
from typing import Callable, Dict

import pytest

from aidev.config.settings import BootstrapConfig
from aidev.core.locking import LockManager
from aidev.core.prefix import InstallPrefix


def write_executable(directory: Path, name: str, body: str = "exit 0\n") -> Path:
    """Create an executable shell script in ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def make_executable() -> Callable[..., Path]:
    """Factory creating fake executables."""
    return write_executable


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def prefix(tmp_path: Path) -> InstallPrefix:
    """Install prefix inside the test directory."""
    return InstallPrefix(tmp_path / "npm-global")


@pytest.fixture
def tools_bin(tmp_path: Path) -> Path:
    """Directory holding a fake npm on the session PATH."""
    bin_dir = tmp_path / "tools-bin"
    write_executable(bin_dir, "npm")
    return bin_dir


@pytest.fixture
def session_env(tmp_path: Path, tools_bin: Path) -> Dict[str, str]:
    """Isolated base environment: only the fake tools are on PATH."""
    return {"PATH": str(tools_bin), "HOME": str(tmp_path / "home")}


@pytest.fixture
def lock_manager(tmp_path: Path) -> LockManager:
    """Lock manager writing into the test directory."""
    return LockManager(lock_dir=tmp_path / "locks")


@pytest.fixture
def config(prefix: InstallPrefix) -> BootstrapConfig:
    """Default configuration with the test install prefix."""
    return BootstrapConfig(install_prefix=prefix)


@pytest.fixture
def output() -> io.StringIO:
    """Captured status output."""
    return io.StringIO()


@pytest.fixture
def isolated_cli_env(monkeypatch, tmp_path: Path) -> Path:
    """
    Isolate CLI runs from the real user environment.

    HOME, AIDEV_HOME and PATH point into the test directory so no real npm
    or assistant CLI is reachable.
    """
    home = tmp_path / "home"
    home.mkdir()
    empty_bin = tmp_path / "empty-bin"
    empty_bin.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("AIDEV_HOME", str(tmp_path / "aidev-home"))
    monkeypatch.setenv("PATH", str(empty_bin))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("NPM_CONFIG_PREFIX", raising=False)
    return home
