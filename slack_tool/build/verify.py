"""Post-install check of the artifact's ``--version`` output."""

import re
from pathlib import Path
from typing import Optional

import structlog

from ..exceptions import VerificationError
from .runner import CommandRunner, run_command

logger = structlog.get_logger()

VERSION_MARKER = "slack-tool version"
VERSION_FLAG = "--version"

_REPORTED_RE = re.compile(re.escape(VERSION_MARKER) + r"\s+(\S+)")


def parse_reported_version(output: str) -> Optional[str]:
    """Return the tag printed after the version marker, if present."""
    match = _REPORTED_RE.search(output)
    return match.group(1) if match else None


def verify_artifact(
    artifact: Path,
    expected_tag: str,
    runner: Optional[CommandRunner] = None,
) -> str:
    """Run ``artifact --version`` and check it reports ``expected_tag``.

    Returns the captured output. Raises VerificationError on a launch
    failure, non-zero exit, missing marker or a different tag. No rollback
    is attempted.
    """
    runner = runner or run_command
    cmd = [str(artifact), VERSION_FLAG]

    try:
        result = runner(cmd, None)
    except OSError as e:
        raise VerificationError(f"Installed artifact could not be run: {e}") from e

    output = (result.stdout or "") + (result.stderr or "")
    if result.returncode != 0:
        raise VerificationError(
            f"{artifact} {VERSION_FLAG} exited with {result.returncode}",
            output=output,
        )

    reported = parse_reported_version(output)
    if reported is None:
        raise VerificationError(
            f"Installed artifact is broken: '{VERSION_MARKER}' not found in output",
            output=output,
        )
    if reported != expected_tag:
        raise VerificationError(
            f"Installed artifact is broken: reports {reported}, expected {expected_tag}",
            output=output,
        )

    logger.info("Artifact verified", artifact=str(artifact), version=reported)
    return output
