"""Test build identity resolution."""

import re
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from slack_tool.build.clock import FixedClock, SystemClock, format_build_timestamp
from slack_tool.build.commit import GitCommitResolver, StaticCommitResolver
from slack_tool.build.identity import BuildIdentity, normalize_version_tag
from slack_tool.build.resolver import VersionResolver

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}_\d{2}:\d{2}:\d{2}$")


class TestNormalizeVersionTag:
    """Test the ``v`` prefix rule."""

    @pytest.mark.parametrize(
        "declared,expected",
        [
            ("1.2.3", "v1.2.3"),
            ("v1.2.3", "v1.2.3"),
            ("0.2.1-rc.1", "v0.2.1-rc.1"),
            ("  0.1.1\n", "v0.1.1"),
        ],
    )
    def test_prefixes_exactly_once(self, declared, expected):
        assert normalize_version_tag(declared) == expected

    def test_idempotent(self):
        once = normalize_version_tag("2.0.0")
        assert normalize_version_tag(once) == once

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            normalize_version_tag("   ")


class TestBuildTimestamp:
    """Test UTC timestamp formatting."""

    def test_format(self):
        moment = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
        assert format_build_timestamp(moment) == "2024-01-15_10:30:00"

    def test_converts_other_timezones_to_utc(self):
        tokyo = timezone(timedelta(hours=9))
        moment = datetime(2024, 1, 15, 19, 30, 0, tzinfo=tokyo)
        assert format_build_timestamp(moment) == "2024-01-15_10:30:00"

    def test_naive_is_treated_as_utc(self):
        assert format_build_timestamp(datetime(2024, 1, 15, 10, 30)) == (
            "2024-01-15_10:30:00"
        )

    def test_system_clock_is_utc(self):
        now = SystemClock().now()
        assert now.utcoffset() == timedelta(0)
        assert TIMESTAMP_RE.match(format_build_timestamp(now))


class TestGitCommitResolver:
    """Test the git-backed commit lookup."""

    def test_missing_git_returns_none(self, tmp_path):
        resolver = GitCommitResolver(git_binary="definitely-not-a-git-binary")
        assert resolver.resolve(tmp_path) is None

    def test_failed_query_returns_none(self, tmp_path):
        error = subprocess.CalledProcessError(128, ["git"], stderr="not a git repo")
        with patch("slack_tool.build.commit.shutil.which", return_value="/usr/bin/git"):
            with patch("slack_tool.build.commit.subprocess.run", side_effect=error):
                assert GitCommitResolver().resolve(tmp_path) is None

    def test_returns_short_hash(self, tmp_path):
        completed = subprocess.CompletedProcess(
            ["git"], 0, stdout="a1b2c3d\n", stderr=""
        )
        with patch("slack_tool.build.commit.shutil.which", return_value="/usr/bin/git"):
            with patch(
                "slack_tool.build.commit.subprocess.run", return_value=completed
            ) as run:
                assert GitCommitResolver().resolve(tmp_path) == "a1b2c3d"

        cmd = run.call_args.args[0]
        assert cmd[1:] == ["rev-parse", "--short", "HEAD"]
        assert run.call_args.kwargs["cwd"] == tmp_path

    def test_empty_output_returns_none(self, tmp_path):
        completed = subprocess.CompletedProcess(["git"], 0, stdout="\n", stderr="")
        with patch("slack_tool.build.commit.shutil.which", return_value="/usr/bin/git"):
            with patch("slack_tool.build.commit.subprocess.run", return_value=completed):
                assert GitCommitResolver().resolve(tmp_path) is None


class TestVersionResolver:
    """Test VersionResolver with fake capabilities."""

    def _resolver(self, commit, placeholder="unknown"):
        clock = FixedClock(datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc))
        return VersionResolver(
            commit_resolver=StaticCommitResolver(commit),
            clock=clock,
            placeholder=placeholder,
        )

    def test_resolves_full_identity(self):
        identity = self._resolver("a1b2c3d").resolve("0.2.1", Path("."))
        assert identity == BuildIdentity(
            version_tag="v0.2.1",
            commit_hash="a1b2c3d",
            build_timestamp="2024-01-15_10:30:00",
        )

    def test_commit_failure_uses_placeholder(self):
        identity = self._resolver(None).resolve("0.2.1", Path("."))
        assert identity.commit_hash == "unknown"
        assert identity.version_tag == "v0.2.1"
        assert identity.build_timestamp == "2024-01-15_10:30:00"

    def test_empty_placeholder(self):
        identity = self._resolver(None, placeholder="").resolve("v1.0.0", Path("."))
        assert identity.commit_hash == ""

    def test_outside_checkout_still_completes(self, tmp_path):
        resolver = VersionResolver(
            commit_resolver=GitCommitResolver(git_binary="definitely-not-a-git-binary")
        )
        identity = resolver.resolve("1.2.3", tmp_path)
        assert identity.version_tag == "v1.2.3"
        assert identity.commit_hash == "unknown"
        assert TIMESTAMP_RE.match(identity.build_timestamp)

    def test_identity_is_immutable(self):
        identity = self._resolver("a1b2c3d").resolve("0.2.1", Path("."))
        with pytest.raises(AttributeError):
            identity.version_tag = "v9.9.9"
