"""Main entry point for the slack-tool installer."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import ValidationError

from slack_tool import __version__
from slack_tool.build import (
    GitCommitResolver,
    Installer,
    VersionResolver,
    write_build_info,
)
from slack_tool.config.settings import BuildSettings
from slack_tool.exceptions import BuildPipelineError, ConfigurationError


def setup_logging(debug: bool = False, level: Optional[str] = None) -> None:
    """Configure structured logging.

    Logs go to stderr so stdout carries only command output.
    """
    if level is None:
        level = "DEBUG" if debug else "INFO"

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.processors.JSONRenderer()
                if not debug
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="slack-tool-install",
        description="Build, stamp and verify the slack-tool binary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"slack-tool-install {__version__}",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    def _common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--declared-version",
            required=True,
            help="Release version from packaging metadata (e.g. 0.2.1)",
        )
        sub.add_argument(
            "--source",
            type=Path,
            default=Path("."),
            help="Extracted source tree (default: current directory)",
        )

    identity = commands.add_parser("identity", help="Print the resolved build identity")
    _common(identity)

    install = commands.add_parser("install", help="Build and install the binary")
    _common(install)
    install.add_argument(
        "--prefix", type=Path, required=True, help="Install prefix (binary goes to bin/)"
    )
    install.add_argument(
        "--skip-verify",
        action="store_true",
        help="Do not run the installed binary with --version",
    )

    stamp = commands.add_parser("stamp", help="Write build_info.json for the Python CLI")
    _common(stamp)
    stamp.add_argument("--output", type=Path, required=True, help="Destination file")

    return parser.parse_args(argv)


def _make_resolver(settings: BuildSettings) -> VersionResolver:
    return VersionResolver(
        commit_resolver=GitCommitResolver(settings.git_binary),
        placeholder=settings.commit_placeholder,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Installer entry point; returns an exit code."""
    args = parse_args(argv)
    logger = structlog.get_logger()

    try:
        settings = BuildSettings()
    except ValidationError as e:
        setup_logging(debug=args.debug)
        logger.error("Configuration error", error=str(e))
        print(f"Error: invalid build settings\n{e}", file=sys.stderr)
        return 1

    setup_logging(
        debug=args.debug or settings.debug,
        level=None if (args.debug or settings.debug) else settings.log_level,
    )
    logger.info("Starting slack-tool installer", version=__version__, command=args.command)

    try:
        if args.command == "identity":
            identity = _make_resolver(settings).resolve(
                args.declared_version, args.source
            )
            print(json.dumps(identity.as_dict(), indent=2))
        elif args.command == "install":
            installer = Installer(settings, resolver=_make_resolver(settings))
            result = installer.install(
                args.declared_version,
                args.source,
                args.prefix,
                verify=not args.skip_verify,
            )
            print(result.artifact)
        elif args.command == "stamp":
            identity = _make_resolver(settings).resolve(
                args.declared_version, args.source
            )
            print(write_build_info(identity, args.output))
    except (BuildPipelineError, ConfigurationError, ValueError) as e:
        logger.error("Installation failed", error=str(e), error_type=type(e).__name__)
        print(str(e), file=sys.stderr)
        return 1

    return 0


def run() -> None:
    """Synchronous entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    run()
