"""Test detection of link overrides that would be silently ignored."""

import subprocess

import pytest
import structlog
from structlog.testing import capture_logs

from slack_tool.build.identity import BuildIdentity
from slack_tool.build.invoker import BuildInvoker
from slack_tool.build.symbols import (
    LinkSymbolOverride,
    declared_variables,
    find_unbound_overrides,
    overrides_for,
    read_module_path,
)
from slack_tool.config.settings import BuildSettings
from slack_tool.exceptions import BuildError

MODULE = "github.com/shellme/slack-tool"
ROOT_GO = """package cmd

import (
\t"fmt"
)

// set at build time
var (
\tversion = "dev"
\tcommit  = "unknown"
\tdate    = "unknown"
)

var rootCmd = &cobra.Command{
\tUse: "slack-tool",
}

func init() {
\tfmt.Println(version)
}
"""

IDENTITY = BuildIdentity("v0.2.1", "a1b2c3d", "2024-01-15_10:30:00")


@pytest.fixture
def source_tree(tmp_path):
    (tmp_path / "go.mod").write_text(f"module {MODULE}\n\ngo 1.21\n")
    pkg = tmp_path / "cmd" / "slack-tool" / "cmd"
    pkg.mkdir(parents=True)
    (pkg / "root.go").write_text(ROOT_GO)
    (pkg / "root_test.go").write_text("package cmd\n\nvar testOnly = 1\n")
    return tmp_path


def _settings(**overrides):
    defaults = {"_env_file": None}
    defaults.update(overrides)
    return BuildSettings(**defaults)


class TestLinkSymbolOverride:
    def test_flag_and_parts(self):
        override = LinkSymbolOverride(f"{MODULE}/cmd.version", "v1.0.0")
        assert override.as_flag() == f"-X {MODULE}/cmd.version=v1.0.0"
        assert override.package == f"{MODULE}/cmd"
        assert override.name == "version"

    def test_value_with_space_is_quoted(self):
        override = LinkSymbolOverride("main.commit", "not available")
        assert override.as_flag() == "-X 'main.commit=not available'"

    def test_value_with_single_quote_uses_double_quotes(self):
        override = LinkSymbolOverride("main.commit", "it's here")
        assert override.as_flag() == "-X \"main.commit=it's here\""

    def test_unquotable_value(self):
        override = LinkSymbolOverride("main.commit", "a 'b' \"c\"")
        with pytest.raises(BuildError):
            override.as_flag()

    def test_exactly_three_overrides(self):
        overrides = overrides_for(IDENTITY, _settings())
        assert [o.value for o in overrides] == [
            "v0.2.1",
            "a1b2c3d",
            "2024-01-15_10:30:00",
        ]
        assert {o.name for o in overrides} == {"version", "commit", "date"}


class TestDeclaredVariables:
    def test_reads_var_block_and_single_vars(self, source_tree):
        names = declared_variables(source_tree / "cmd" / "slack-tool" / "cmd")
        assert {"version", "commit", "date", "rootCmd"} <= names

    def test_ignores_test_files(self, source_tree):
        names = declared_variables(source_tree / "cmd" / "slack-tool" / "cmd")
        assert "testOnly" not in names

    def test_read_module_path(self, source_tree, tmp_path):
        assert read_module_path(source_tree) == MODULE
        assert read_module_path(tmp_path / "nowhere") is None


class TestFindUnboundOverrides:
    def test_matching_symbols_are_bound(self, source_tree):
        overrides = overrides_for(IDENTITY, _settings())
        assert find_unbound_overrides(source_tree, overrides) == []

    def test_renamed_variable_is_reported(self, source_tree):
        overrides = overrides_for(IDENTITY, _settings(date_symbol="buildDate"))
        unbound = find_unbound_overrides(source_tree, overrides)
        assert [o.name for o in unbound] == ["buildDate"]

    def test_moved_package_is_reported(self, source_tree):
        # Package path from before the cmd/ restructuring
        settings = _settings(symbol_package=f"{MODULE}/cmd")
        unbound = find_unbound_overrides(source_tree, overrides_for(IDENTITY, settings))
        assert len(unbound) == 3

    def test_main_package_uses_compile_target(self, source_tree):
        main_dir = source_tree / "cmd" / "slack-tool"
        (main_dir / "main.go").write_text(
            'package main\n\nvar version = "dev"\nvar commit, date string\n'
        )
        settings = _settings(symbol_package="main")
        unbound = find_unbound_overrides(
            source_tree, overrides_for(IDENTITY, settings), settings.compile_target
        )
        assert unbound == []

    def test_external_package_is_not_checked(self, source_tree):
        settings = _settings(symbol_package="example.com/other/pkg")
        assert find_unbound_overrides(source_tree, overrides_for(IDENTITY, settings)) == []

    def test_without_go_mod_nothing_is_checked(self, tmp_path):
        overrides = overrides_for(IDENTITY, _settings())
        assert find_unbound_overrides(tmp_path, overrides) == []

    def test_invoker_warns_and_builds_anyway(self, source_tree, monkeypatch):
        settings = _settings(version_symbol="Version")
        calls = []

        def runner(cmd, cwd):
            calls.append(cmd)
            out = cmd[cmd.index("-o") + 1]
            open(out, "wb").close()
            return subprocess.CompletedProcess(cmd, 0, "", "")

        # Fresh proxy: module loggers may already be cached by setup_logging
        monkeypatch.setattr("slack_tool.build.invoker.logger", structlog.get_logger())
        with capture_logs() as logs:
            artifact = BuildInvoker(settings, runner=runner).invoke(
                IDENTITY, source_tree, source_tree / "slack-tool"
            )
        assert artifact.exists()
        assert len(calls) == 1

        warnings = [e for e in logs if e["log_level"] == "warning"]
        assert [e["symbol"] for e in warnings] == [f"{MODULE}/cmd/slack-tool/cmd.Version"]
        assert "no matching variable" in warnings[0]["event"]
