"""Default command collaborators for menu actions.

Menus never run commands themselves: confirming a Command entry calls an
``execute(command)`` callable, and confirming an ``@``-marked entry calls an
``invoke(command)`` callable whose return value becomes a sub-menu. These
are the shell-backed defaults; hosts can pass their own.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def run_command(command: str) -> int:
    """Run ``command`` through the shell, inheriting the terminal.

    Raises:
        subprocess.CalledProcessError: If the command exits non-zero.
    """
    logger.info("Running command: %s", command)
    result = subprocess.run(command, shell=True, check=True)
    return result.returncode


def parse_entries_output(output: str) -> Any:
    """Parse command output into a menu source.

    YAML lists and mappings are used as-is. Anything YAML reads as a
    plain scalar is treated as one label per non-blank line.
    """
    try:
        data = yaml.safe_load(output)
    except yaml.YAMLError:
        data = None
    if isinstance(data, dict):
        return data
    if isinstance(data, list):
        # Numbered lists come back as ints; labels must be strings
        return [item if isinstance(item, str) else str(item) for item in data]
    return [line.strip() for line in output.splitlines() if line.strip()]


def invoke_command(command: str) -> Any:
    """Run ``command`` and return its stdout parsed as menu entries.

    Raises:
        subprocess.CalledProcessError: If the command exits non-zero.
    """
    logger.debug("Invoking command for sub-menu: %s", command)
    result = subprocess.run(
        command, shell=True, check=True, capture_output=True, text=True
    )
    return parse_entries_output(result.stdout)
