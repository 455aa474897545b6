"""Build settings and user configuration."""

from .settings import BuildSettings
from .store import ConfigManager, ToolConfig, default_config_path
from .token import mask_token, validate_token

__all__ = [
    "BuildSettings",
    "ConfigManager",
    "ToolConfig",
    "default_config_path",
    "mask_token",
    "validate_token",
]
