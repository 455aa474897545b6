"""Link-time symbol overrides.

The Go linker's ``-X importpath.name=value`` flag assigns a string literal to
a package-level variable. A name that does not match a declared variable is
ignored by the linker without any diagnostic, so ``find_unbound_overrides``
inspects the target package to catch that case before building.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

import structlog

from ..config.settings import BuildSettings
from ..exceptions import BuildError
from .identity import BuildIdentity

logger = structlog.get_logger()

_MODULE_RE = re.compile(r"^module\s+(\S+)", re.MULTILINE)
_VAR_LINE_RE = re.compile(r"^var\s+(\w+(?:\s*,\s*\w+)*)")
_BLOCK_ENTRY_RE = re.compile(r"^\s+(\w+(?:\s*,\s*\w+)*)\s*(?:=|\w|\[|\*|$)")
_BLOCK_START_RE = re.compile(r"^var\s*\(\s*(?://.*)?$")

MAIN_PACKAGE = "main"


@dataclass(frozen=True)
class LinkSymbolOverride:
    """Assigns ``value`` to the package variable named by ``symbol``."""

    symbol: str
    value: str

    @property
    def package(self) -> str:
        return self.symbol.rpartition(".")[0]

    @property
    def name(self) -> str:
        return self.symbol.rpartition(".")[2]

    def as_flag(self) -> str:
        """Render as a ``-X`` pair, quoted when the value contains whitespace.

        ``go build`` splits ``-ldflags`` on whitespace and honours single or
        double quotes without escapes.
        """
        assignment = f"{self.symbol}={self.value}"
        if not any(ch.isspace() or ch in "'\"" for ch in assignment):
            return f"-X {assignment}"
        for quote in ("'", '"'):
            if quote not in assignment:
                return f"-X {quote}{assignment}{quote}"
        raise BuildError(
            f"Cannot quote link override value for {self.symbol}: {self.value!r}"
        )


def overrides_for(
    identity: BuildIdentity, settings: BuildSettings
) -> List[LinkSymbolOverride]:
    """Build the three overrides carrying ``identity``."""
    return [
        LinkSymbolOverride(settings.version_target, identity.version_tag),
        LinkSymbolOverride(settings.commit_target, identity.commit_hash),
        LinkSymbolOverride(settings.date_target, identity.build_timestamp),
    ]


def read_module_path(source_dir: Path) -> Optional[str]:
    """Return the module path declared in ``go.mod``, if any."""
    go_mod = source_dir / "go.mod"
    if not go_mod.is_file():
        return None
    match = _MODULE_RE.search(go_mod.read_text(encoding="utf-8"))
    return match.group(1) if match else None


def declared_variables(package_dir: Path) -> Set[str]:
    """Collect package-level ``var`` names from the non-test Go files."""
    names: Set[str] = set()
    for go_file in sorted(package_dir.glob("*.go")):
        if go_file.name.endswith("_test.go"):
            continue
        in_block = False
        for line in go_file.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if in_block:
                if stripped.startswith(")"):
                    in_block = False
                    continue
                match = _BLOCK_ENTRY_RE.match(line)
                if match:
                    names.update(n.strip() for n in match.group(1).split(","))
                continue
            if _BLOCK_START_RE.match(line):
                in_block = True
                continue
            match = _VAR_LINE_RE.match(line)
            if match:
                names.update(n.strip() for n in match.group(1).split(","))
    return names


def _package_dir(
    package: str, source_dir: Path, module_path: str, compile_target: str
) -> Optional[Path]:
    if package == MAIN_PACKAGE:
        return source_dir / compile_target
    if package == module_path:
        return source_dir
    if package.startswith(module_path + "/"):
        return source_dir / package[len(module_path) + 1 :]
    return None


def find_unbound_overrides(
    source_dir: Path,
    overrides: List[LinkSymbolOverride],
    compile_target: str = ".",
) -> List[LinkSymbolOverride]:
    """Return overrides whose variable is not declared in the target source.

    Packages outside the module (or a tree without ``go.mod``) cannot be
    inspected and are reported as bound.
    """
    module_path = read_module_path(source_dir)
    if module_path is None:
        logger.debug("No go.mod found, skipping symbol check", source_dir=str(source_dir))
        return []

    unbound: List[LinkSymbolOverride] = []
    cache: dict[str, Set[str]] = {}
    for override in overrides:
        package_dir = _package_dir(
            override.package, source_dir, module_path, compile_target
        )
        if package_dir is None:
            logger.debug("Override targets external package", symbol=override.symbol)
            continue
        key = str(package_dir)
        if key not in cache:
            cache[key] = (
                declared_variables(package_dir) if package_dir.is_dir() else set()
            )
        if override.name not in cache[key]:
            unbound.append(override)
    return unbound
