"""Slack Tool build and install pipeline.

Builds the slack-tool CLI from source and stamps the resulting binary with
its build identity (release tag, commit hash, build timestamp), then checks
that the installed artifact reports the version it was built with.

Features:
- Build identity resolution from packaging metadata, git and the UTC clock
- Link-time metadata injection with stripped binaries
- Post-install ``--version`` verification
- Environment-based configuration with Pydantic validation
- Structured logging
"""

__version__ = "0.2.1"
__license__ = "MIT"
