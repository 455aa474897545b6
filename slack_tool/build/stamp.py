"""Write a build identity for the Python CLI to load at startup."""

import json
from pathlib import Path

import structlog

from ..exceptions import PathError
from .identity import BuildIdentity

logger = structlog.get_logger()


def write_build_info(identity: BuildIdentity, path: Path) -> Path:
    """Serialize ``identity`` as JSON at ``path``."""
    path = Path(path)
    if not path.parent.is_dir():
        raise PathError(f"Output directory does not exist: {path.parent}")

    payload = {
        "version": identity.version_tag,
        "commit": identity.commit_hash,
        "date": identity.build_timestamp,
    }
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote build info", path=str(path), **payload)
    return path
