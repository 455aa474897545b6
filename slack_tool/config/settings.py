"""Build configuration using Pydantic Settings.

Features:
- Environment variable loading (``SLACK_TOOL_`` prefix)
- Type validation
- Default values matching the upstream source layout
- Computed symbol names for link-time overrides
"""

from pathlib import PurePosixPath
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYMBOL_PACKAGE = "github.com/shellme/slack-tool/cmd/slack-tool/cmd"
DEFAULT_COMPILE_TARGET = "./cmd/slack-tool"


class BuildSettings(BaseSettings):
    """Build settings loaded from environment variables."""

    # Toolchain
    go_binary: str = Field("go", description="Go toolchain executable")
    git_binary: str = Field("git", description="Git executable for commit lookup")
    trimpath: bool = Field(
        True, description="Strip local file system paths from the binary"
    )

    # Source layout
    compile_target: str = Field(
        DEFAULT_COMPILE_TARGET,
        description="Command-line entry point package, relative to the source root",
    )
    symbol_package: str = Field(
        DEFAULT_SYMBOL_PACKAGE,
        description="Import path of the package that declares the version variables",
    )
    version_symbol: str = Field("version", description="Variable receiving the tag")
    commit_symbol: str = Field("commit", description="Variable receiving the commit")
    date_symbol: str = Field("date", description="Variable receiving the timestamp")

    # Identity
    commit_placeholder: str = Field(
        "unknown", description="Commit value used when git cannot be queried"
    )

    # Monitoring
    log_level: str = Field("INFO", description="Logging level")
    debug: bool = Field(False, description="Enable debug mode")

    model_config = SettingsConfigDict(
        env_prefix="SLACK_TOOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("compile_target")
    @classmethod
    def validate_compile_target(cls, v: Any) -> str:
        """Ensure the compile target is relative to the source root."""
        value = str(v).strip()
        if not value:
            raise ValueError("compile_target must not be empty")
        if PurePosixPath(value).is_absolute():
            raise ValueError(f"compile_target must be a relative path: {value}")
        # go build treats bare names as import paths, not directories
        if not value.startswith("./") and value != ".":
            value = f"./{value}"
        return value

    @field_validator("symbol_package", "version_symbol", "commit_symbol", "date_symbol")
    @classmethod
    def validate_identifier(cls, v: Any) -> str:
        """Reject blanks and whitespace inside symbol names."""
        value = str(v).strip()
        if not value or any(ch.isspace() for ch in value):
            raise ValueError(f"Invalid symbol name: {v!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()  # type: ignore[no-any-return]

    def qualified_symbol(self, name: str) -> str:
        """Return the fully-qualified linker name for a package variable."""
        return f"{self.symbol_package}.{name}"

    @property
    def version_target(self) -> str:
        return self.qualified_symbol(self.version_symbol)

    @property
    def commit_target(self) -> str:
        return self.qualified_symbol(self.commit_symbol)

    @property
    def date_target(self) -> str:
        return self.qualified_symbol(self.date_symbol)
