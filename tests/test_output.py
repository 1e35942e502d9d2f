"""Tests for chefctl.output: format selection, colour rules, the stdout/stderr
split, and how settings, command lines, documents and tables are printed."""

from __future__ import annotations

import json

import pytest

from chefctl import output as output_module
from chefctl.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("chefctl.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("chefctl.output._is_tty", lambda: True)


@pytest.fixture()
def plain(non_tty) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True)


@pytest.fixture()
def as_json(non_tty) -> OutputManager:
    return OutputManager(format=OutputFormat.JSON, no_color=True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """Test that AUTO format resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_no_color(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        assert mgr.format == OutputFormat.JSON


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Test that data goes to stdout and diagnostics go to stderr."""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, plain, method):
        getattr(plain, method)("something happened")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "something happened" in captured.err

    def test_prefixes_in_no_color(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.warning("w")
        mgr.error("e")
        mgr.debug("d")
        err = capfd.readouterr().err.splitlines()
        assert err == ["Warning: w", "Error: e", "[debug] d"]

    def test_print_data_goes_to_stdout(self, capfd, plain):
        plain.print_data("hello world")
        captured = capfd.readouterr()
        assert captured.out == "hello world\n"
        assert captured.err == ""


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warning_and_error(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        err = capfd.readouterr().err
        assert "careful" in err
        assert "broken" in err

    def test_quiet_keeps_notice(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.notice("Chef repo: /etc/chef/repo")
        assert capfd.readouterr().err == "Chef repo: /etc/chef/repo\n"

    def test_debug_hidden_by_default(self, capfd, plain):
        plain.debug("should not appear")
        assert capfd.readouterr().err == ""


# ------------------------------------------------------------------ #
# Data output
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json(self, capfd, as_json):
        data = {"run_list": ["role[base]"], "fb": {"tier": "web"}}
        as_json.format_response(data)
        assert json.loads(capfd.readouterr().out) == data

    def test_plain_mapping(self, capfd, plain):
        plain.format_response({"splay": 870, "path": ["/usr/sbin", "/usr/bin"]})
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["splay\t870", 'path\t["/usr/sbin", "/usr/bin"]']

    def test_plain_list(self, capfd, plain):
        plain.format_response(["a", "b"])
        assert capfd.readouterr().out == "a\nb\n"


class TestPrintCommand:
    def test_plain_is_shell_quoted(self, capfd, plain):
        plain.print_command(["chef-client", "-o", "recipe[a b]"])
        assert capfd.readouterr().out == "chef-client -o 'recipe[a b]'\n"

    def test_json_is_array(self, capfd, as_json):
        as_json.print_command(["chef-client", "-z"])
        assert json.loads(capfd.readouterr().out) == ["chef-client", "-z"]


class TestPrintSource:
    def test_plain_prints_verbatim(self, capfd, plain):
        plain.print_source("local_mode true\n", "ruby")
        assert capfd.readouterr().out == "local_mode true\n"


class TestPrintTable:
    columns = ["name", "version"]
    records = [{"name": "json-config", "version": "0.1.0", "description": "merge"}]

    def test_plain_is_tsv(self, capfd, plain):
        plain.print_table(self.records, self.columns)
        assert capfd.readouterr().out == "Name\tVersion\njson-config\t0.1.0\n"

    def test_json_is_records(self, capfd, as_json):
        as_json.print_table(self.records, self.columns)
        assert json.loads(capfd.readouterr().out) == self.records


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self, non_tty):
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output(self, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_convenience_functions_delegate(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("data")
        output_module.info("note")
        captured = capfd.readouterr()
        assert captured.out == "data\n"
        assert captured.err == "note\n"
