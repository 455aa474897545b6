"""Build identity stamped into every artifact."""

from dataclasses import asdict, dataclass
from typing import Dict

VERSION_PREFIX = "v"


def normalize_version_tag(declared_version: str) -> str:
    """Return the declared version prefixed with ``v`` exactly once."""
    version = declared_version.strip()
    if not version:
        raise ValueError("Declared version must not be empty")
    if version.startswith(VERSION_PREFIX):
        return version
    return f"{VERSION_PREFIX}{version}"


@dataclass(frozen=True)
class BuildIdentity:
    """Version tag, commit hash and build timestamp for one install."""

    version_tag: str
    commit_hash: str
    build_timestamp: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)
