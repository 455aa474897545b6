"""Derive the build identity for one install."""

from pathlib import Path
from typing import Optional

import structlog

from .clock import Clock, SystemClock, format_build_timestamp
from .commit import CommitResolver, GitCommitResolver
from .identity import BuildIdentity, normalize_version_tag

logger = structlog.get_logger()


class VersionResolver:
    """Compute version tag, commit hash and build timestamp.

    A failed commit lookup never aborts the build: the configured placeholder
    is used instead.
    """

    def __init__(
        self,
        commit_resolver: Optional[CommitResolver] = None,
        clock: Optional[Clock] = None,
        placeholder: str = "unknown",
    ) -> None:
        self.commit_resolver = commit_resolver or GitCommitResolver()
        self.clock = clock or SystemClock()
        self.placeholder = placeholder

    def resolve(self, declared_version: str, source_dir: Path) -> BuildIdentity:
        version_tag = normalize_version_tag(declared_version)

        commit_hash = self.commit_resolver.resolve(source_dir)
        if not commit_hash:
            logger.warning(
                "Commit hash unavailable, using placeholder",
                source_dir=str(source_dir),
                placeholder=self.placeholder,
            )
            commit_hash = self.placeholder

        identity = BuildIdentity(
            version_tag=version_tag,
            commit_hash=commit_hash,
            build_timestamp=format_build_timestamp(self.clock.now()),
        )
        logger.info("Resolved build identity", **identity.as_dict())
        return identity
