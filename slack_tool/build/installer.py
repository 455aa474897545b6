"""Resolve, build and verify, in that order."""

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Optional

import structlog

from ..config.settings import BuildSettings
from ..exceptions import PathError
from .commit import GitCommitResolver
from .identity import BuildIdentity
from .invoker import BuildInvoker
from .resolver import VersionResolver
from .runner import CommandRunner
from .verify import verify_artifact

logger = structlog.get_logger()

ARTIFACT_NAME = "slack-tool"

# (artifact, expected_tag) -> captured --version output
Verifier = Callable[[Path, str], str]


@dataclass(frozen=True)
class InstallResult:
    identity: BuildIdentity
    artifact: Path
    verified: bool


class Installer:
    """One-shot install pipeline.

    Each step blocks until complete. Fatal errors from any step propagate
    unchanged; nothing is retried or rolled back.
    """

    def __init__(
        self,
        settings: BuildSettings,
        resolver: Optional[VersionResolver] = None,
        invoker: Optional[BuildInvoker] = None,
        verifier: Optional[Verifier] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self.settings = settings
        self.resolver = resolver or VersionResolver(
            commit_resolver=GitCommitResolver(settings.git_binary),
            placeholder=settings.commit_placeholder,
        )
        self.invoker = invoker or BuildInvoker(settings, runner=runner)
        self.verifier = verifier or partial(verify_artifact, runner=runner)

    @staticmethod
    def artifact_path(prefix: Path) -> Path:
        return Path(prefix) / "bin" / ARTIFACT_NAME

    def install(
        self,
        declared_version: str,
        source_dir: Path,
        prefix: Path,
        verify: bool = True,
    ) -> InstallResult:
        source_dir = Path(source_dir)
        prefix = Path(prefix)
        identity = self.resolver.resolve(declared_version, source_dir)

        # The prefix itself must exist; bin/ inside it is ours to create
        if prefix.is_dir():
            try:
                (prefix / "bin").mkdir(exist_ok=True)
            except OSError as e:
                raise PathError(
                    f"Cannot create install directory {prefix / 'bin'}: {e}"
                ) from e
        artifact = self.invoker.invoke(
            identity, source_dir, self.artifact_path(prefix)
        )

        if verify:
            self.verifier(artifact, identity.version_tag)
        else:
            logger.warning("Skipping post-install verification", artifact=str(artifact))

        logger.info(
            "Installation complete",
            artifact=str(artifact),
            version=identity.version_tag,
            verified=verify,
        )
        return InstallResult(identity=identity, artifact=artifact, verified=verify)
