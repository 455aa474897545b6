"""Commit lookup for the source checkout."""

# ruff: noqa: S603

import shutil
import subprocess  # nosec B404 - subprocess is used with fixed git arguments
from pathlib import Path
from typing import Optional, Protocol

import structlog

logger = structlog.get_logger()


class CommitResolver(Protocol):
    def resolve(self, source_dir: Path) -> Optional[str]: ...


class GitCommitResolver:
    """Asks git for the short hash of HEAD.

    Every failure (git missing, not a checkout, empty output) yields ``None``.
    """

    def __init__(self, git_binary: str = "git") -> None:
        self.git_binary = git_binary

    def resolve(self, source_dir: Path) -> Optional[str]:
        git_exec = shutil.which(self.git_binary)
        if not git_exec:
            logger.debug("git executable not found", git_binary=self.git_binary)
            return None
        try:
            result = subprocess.run(  # nosec S603
                [git_exec, "rev-parse", "--short", "HEAD"],
                check=True,
                capture_output=True,
                text=True,
                cwd=source_dir,
            )
        except (subprocess.CalledProcessError, OSError) as e:
            logger.debug(
                "git rev-parse failed", source_dir=str(source_dir), error=str(e)
            )
            return None
        return result.stdout.strip() or None


class StaticCommitResolver:
    """Returns a preset commit, or ``None`` to simulate a failed lookup."""

    def __init__(self, commit: Optional[str]) -> None:
        self.commit = commit

    def resolve(self, source_dir: Path) -> Optional[str]:
        return self.commit
