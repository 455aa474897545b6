"""Persistent user configuration for the slack-tool CLI."""

import json
import os
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel, ValidationError

from ..exceptions import ConfigFileError

logger = structlog.get_logger()

_FILE_MODE = 0o600
_DIR_MODE = 0o755


def default_config_path() -> Path:
    """Return ``~/.config/slack-tool/config.json``."""
    return Path.home() / ".config" / "slack-tool" / "config.json"


class ToolConfig(BaseModel):
    """Settings saved by ``slack-tool config set``."""

    slack_token: str = ""


class ConfigManager:
    """Load and save ToolConfig as JSON on disk."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._config_path = Path(config_path) if config_path else default_config_path()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> ToolConfig:
        """Read the config file; a missing file yields an empty config."""
        if not self._config_path.exists():
            return ToolConfig()

        try:
            raw = self._config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(
                f"Failed to read config file {self._config_path}: {e}"
            ) from e

        try:
            return ToolConfig.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigFileError(
                f"Failed to parse config file {self._config_path}: {e}"
            ) from e

    def save(self, config: ToolConfig) -> None:
        """Write the config file, owner-readable only."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True, mode=_DIR_MODE)
            data = json.dumps(config.model_dump(), indent=2)
            fd = os.open(
                self._config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            # O_CREAT only applies the mode to new files
            os.chmod(self._config_path, _FILE_MODE)
        except OSError as e:
            raise ConfigFileError(
                f"Failed to save config file {self._config_path}: {e}"
            ) from e

        logger.debug("Saved configuration", path=str(self._config_path))
