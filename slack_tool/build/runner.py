"""Blocking subprocess execution shared by the build steps."""

# ruff: noqa: S603

import subprocess  # nosec B404 - commands are built from validated settings
from pathlib import Path
from typing import Callable, List, Optional

import structlog

logger = structlog.get_logger()

CommandRunner = Callable[[List[str], Optional[Path]], "subprocess.CompletedProcess[str]"]


def run_command(
    cmd: List[str], cwd: Optional[Path] = None
) -> "subprocess.CompletedProcess[str]":
    """Run ``cmd`` to completion, capturing text output. No timeout."""
    logger.debug("Running command", cmd=cmd, cwd=str(cwd) if cwd else None)
    return subprocess.run(  # nosec S603
        cmd,
        check=False,
        capture_output=True,
        text=True,
        cwd=cwd,
    )
