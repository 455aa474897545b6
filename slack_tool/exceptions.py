"""Custom exceptions for Slack Tool."""

from typing import List, Optional


class SlackToolError(Exception):
    """Base exception for Slack Tool."""


class ConfigurationError(SlackToolError):
    """Configuration-related errors."""


class InvalidTokenError(ConfigurationError):
    """Slack token does not have a valid format."""


class ConfigFileError(ConfigurationError):
    """Configuration file could not be read or parsed."""


class BuildPipelineError(SlackToolError):
    """Errors raised while building or installing the artifact."""


class PathError(BuildPipelineError):
    """Output location is missing or not writable."""


class BuildError(BuildPipelineError):
    """Compiler toolchain invocation failed."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class VerificationError(BuildPipelineError):
    """Installed artifact does not report the expected version."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output
