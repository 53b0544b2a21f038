"""Tests for the output sink.

Covers format resolution, NO_COLOR handling, stdout/stderr discipline,
quiet and verbose modes, and the global instance helpers.
"""

from __future__ import annotations

import json

import pytest

from nodepath import output as output_module
from nodepath.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("nodepath.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("nodepath.output._is_tty", lambda: True)


class TestFormatResolution:
    def test_auto_is_plain_when_piped(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_is_rich_on_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_is_plain_with_no_color(self, tty, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_format_kept(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color()

    def test_dumb_terminal(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color()

    def test_enabled_by_default(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert not _should_disable_color()


class TestStreams:
    def test_print_data_goes_to_stdout(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_data("a → b")
        captured = capsys.readouterr()
        assert captured.out == "a → b\n"
        assert captured.err == ""

    def test_print_data_json_is_string_literal(self, capsys):
        OutputManager(format=OutputFormat.JSON, no_color=True).print_data("a → b")
        assert json.loads(capsys.readouterr().out) == "a → b"

    def test_diagnostics_go_to_stderr(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.info("hello")
        mgr.warning("careful")
        mgr.error("broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "hello\nWarning: careful\nError: broken\n"

    def test_quiet_suppresses_info_not_warnings(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hello")
        mgr.success("yay")
        mgr.warning("careful")
        assert capsys.readouterr().err == "Warning: careful\n"

    def test_debug_only_when_verbose(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("hidden")
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("shown")
        assert capsys.readouterr().err == "[debug] shown\n"


class TestStructuredOutput:
    def test_table_plain_is_tsv(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["name", "event"], [["show-tree", "show-tree.describe"]])
        assert capsys.readouterr().out == "name\tevent\nshow-tree\tshow-tree.describe\n"

    def test_table_json_is_records(self, capsys):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_table(["name"], [["a"], ["b"]])
        assert json.loads(capsys.readouterr().out) == [{"name": "a"}, {"name": "b"}]

    def test_format_response_plain_dict(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.format_response({"separator": "→"})
        assert capsys.readouterr().out == "separator\t→\n"

    def test_format_response_json(self, capsys):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.format_response({"show_tree": {"separator": "/"}})
        assert json.loads(capsys.readouterr().out) == {"show_tree": {"separator": "/"}}


class TestGlobalInstance:
    def test_lazy_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_and_use(self, capsys):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("x")
        output_module.warning("w")
        captured = capsys.readouterr()
        assert captured.out == "x\n"
        assert captured.err == "Warning: w\n"
