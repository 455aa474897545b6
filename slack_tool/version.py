from dataclasses import dataclass
import json
from pathlib import Path
from typing import Optional

from slack_tool import __version__
from slack_tool.build.identity import normalize_version_tag
from slack_tool.build.verify import VERSION_MARKER

BUILD_INFO_FILE = "build_info.json"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class BuildInfo:
    """Identity the CLI reports about itself.

    Passed explicitly into ``create_parser`` rather than patched into
    module globals.
    """

    version: str
    commit: str = UNKNOWN
    date: str = UNKNOWN

    def version_line(self) -> str:
        return f"{VERSION_MARKER} {self.version}"

    def details(self) -> str:
        return f"{self.version_line()}\ncommit: {self.commit}\nbuilt: {self.date}"


def default_build_info() -> BuildInfo:
    return BuildInfo(version=normalize_version_tag(__version__))


def load_build_info(path: Optional[Path] = None) -> BuildInfo:
    """Reads the stamped build_info.json if present.

    Falls back to the package version with unknown commit and date when the
    file is missing or unreadable (e.g. an editable dev install).
    """
    path = path or Path(__file__).with_name(BUILD_INFO_FILE)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return default_build_info()

    if not isinstance(data, dict) or not data.get("version"):
        return default_build_info()

    try:
        version = normalize_version_tag(str(data["version"]))
    except ValueError:
        return default_build_info()

    return BuildInfo(
        version=version,
        commit=str(data.get("commit") or UNKNOWN),
        date=str(data.get("date") or UNKNOWN),
    )
