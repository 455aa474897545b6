"""Build identity resolution, compilation and post-install verification."""

from .clock import Clock, FixedClock, SystemClock, format_build_timestamp
from .commit import CommitResolver, GitCommitResolver, StaticCommitResolver
from .identity import BuildIdentity, normalize_version_tag
from .installer import Installer, InstallResult
from .invoker import STRIP_FLAGS, BuildInvoker
from .resolver import VersionResolver
from .stamp import write_build_info
from .symbols import LinkSymbolOverride, find_unbound_overrides, overrides_for
from .verify import VERSION_MARKER, parse_reported_version, verify_artifact

__all__ = [
    "BuildIdentity",
    "BuildInvoker",
    "Clock",
    "CommitResolver",
    "FixedClock",
    "GitCommitResolver",
    "Installer",
    "InstallResult",
    "LinkSymbolOverride",
    "STRIP_FLAGS",
    "StaticCommitResolver",
    "SystemClock",
    "VERSION_MARKER",
    "VersionResolver",
    "find_unbound_overrides",
    "format_build_timestamp",
    "normalize_version_tag",
    "overrides_for",
    "parse_reported_version",
    "verify_artifact",
    "write_build_info",
]
