"""
Doctor command for diagnosing the shell environment.

Checks that the tools each shell variant expects are available on the
session PATH (after the install prefix is applied) and that the expected
API keys are configured. Nothing is created or installed.
"""

import logging
import os
from pathlib import Path
from typing import List

from aidev.cli.utils import print_error, resolve_project_root
from aidev.config.settings import load_config
from aidev.core.envfile import apply_env, load_env_files
from aidev.core.exceptions import ConfigError
from aidev.core.output import safe_print
from aidev.core.status import KeyStatus, check_api_key
from aidev.core.tools import CheckResult, check_tools

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the doctor command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every required tool passes, 1 otherwise)
    """
    project_root = resolve_project_root(Path(args.project_root))

    try:
        config = load_config(project_root, args.config)
    except ConfigError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    env = config.install_prefix.apply(os.environ)
    env = apply_env(env, load_env_files(project_root, config.env_files).values)

    safe_print(f"Checking {args.variant} environment in {project_root}")
    safe_print("")

    results = check_tools(args.variant, env)
    _print_results(results)

    safe_print("")
    for key in config.api_keys:
        check = check_api_key(key, env, config.placeholder_markers)
        safe_print(check.message)
        if check.status != KeyStatus.SET:
            logger.debug(f"{key}: {check.status.value}")

    failed = [r for r in results if r.required and not r.passed]
    safe_print("")
    if failed:
        safe_print(f"❌ {len(failed)} required tool check(s) failed")
        return 1

    safe_print("✅ All required tools available")
    return 0


def _print_results(results: List[CheckResult]):
    for result in results:
        if result.passed:
            marker = "✅"
        elif result.required:
            marker = "❌"
        else:
            marker = "⚠️"
        safe_print(f"{marker} {result.name}: {result.message}")
        if not result.passed and result.fix_command:
            safe_print(f"   Fix: {result.fix_command}")
