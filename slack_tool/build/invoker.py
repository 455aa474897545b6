"""Compile the slack-tool binary with its build identity embedded."""

import os
from pathlib import Path
from typing import List, Optional

import structlog

from ..config.settings import BuildSettings
from ..exceptions import BuildError, PathError
from .identity import BuildIdentity
from .runner import CommandRunner, run_command
from .symbols import LinkSymbolOverride, find_unbound_overrides, overrides_for

logger = structlog.get_logger()

# Omit the symbol table and DWARF debug info. Always applied.
STRIP_FLAGS = ("-s", "-w")


class BuildInvoker:
    """Run ``go build`` with link-time overrides for the build identity.

    Failures are never retried: compile errors and missing dependencies are
    deterministic and surface to the caller with the toolchain's output.
    """

    def __init__(
        self, settings: BuildSettings, runner: Optional[CommandRunner] = None
    ) -> None:
        self.settings = settings
        self.runner = runner or run_command

    # ------------------------------------------------------------------
    # Command building
    # ------------------------------------------------------------------

    def overrides(self, identity: BuildIdentity) -> List[LinkSymbolOverride]:
        return overrides_for(identity, self.settings)

    def build_ldflags(self, identity: BuildIdentity) -> str:
        """Join the strip flags and the three overrides into one argument."""
        parts = list(STRIP_FLAGS)
        parts.extend(o.as_flag() for o in self.overrides(identity))
        return " ".join(parts)

    def build_command(self, identity: BuildIdentity, output_path: Path) -> List[str]:
        """Build the ``go build`` argument list."""
        cmd: List[str] = [self.settings.go_binary, "build"]
        if self.settings.trimpath:
            cmd.append("-trimpath")
        cmd.extend(["-o", str(output_path)])
        cmd.extend(["-ldflags", self.build_ldflags(identity)])
        cmd.append(self.settings.compile_target)
        return cmd

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def invoke(
        self, identity: BuildIdentity, source_dir: Path, output_path: Path
    ) -> Path:
        """Compile into ``output_path`` and return it."""
        output_path = Path(output_path).absolute()
        self._check_output_location(output_path)
        self._warn_unbound(identity, source_dir)

        cmd = self.build_command(identity, output_path)
        existed_before = output_path.exists()

        logger.info(
            "Starting build",
            source_dir=str(source_dir),
            output=str(output_path),
            target=self.settings.compile_target,
            **identity.as_dict(),
        )

        try:
            result = self.runner(cmd, source_dir)
        except FileNotFoundError as e:
            raise BuildError(
                f"Compiler toolchain not found: {self.settings.go_binary}",
                command=cmd,
            ) from e

        if result.returncode != 0:
            if not existed_before:
                self._remove_partial(output_path)
            logger.error(
                "Build failed",
                returncode=result.returncode,
                stderr=result.stderr,
            )
            raise BuildError(
                result.stderr.strip()
                or f"{self.settings.go_binary} build exited with {result.returncode}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        if not output_path.is_file():
            raise BuildError(
                f"Build reported success but produced no artifact at {output_path}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        logger.info("Build completed", output=str(output_path))
        return output_path

    def _check_output_location(self, output_path: Path) -> None:
        parent = output_path.parent
        if not parent.is_dir():
            raise PathError(f"Output directory does not exist: {parent}")
        if not os.access(parent, os.W_OK):
            raise PathError(f"Output directory is not writable: {parent}")
        if output_path.is_dir():
            raise PathError(f"Output path is a directory: {output_path}")

    def _warn_unbound(self, identity: BuildIdentity, source_dir: Path) -> None:
        unbound = find_unbound_overrides(
            source_dir, self.overrides(identity), self.settings.compile_target
        )
        for override in unbound:
            logger.warning(
                "Link override has no matching variable and will be ignored",
                symbol=override.symbol,
            )

    def _remove_partial(self, output_path: Path) -> None:
        if output_path.exists():
            output_path.unlink()
            logger.debug("Removed partial artifact", output=str(output_path))
