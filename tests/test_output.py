"""Tests for the output formatting system."""

from __future__ import annotations

import json

import pytest

from pokedex.output import (
    OutputFormat,
    OutputManager,
    get_output,
    reset_output,
    set_output,
)


def _plain(**kwargs: object) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True, **kwargs)


class TestFormatResolution:
    def test_auto_is_plain_when_not_a_tty(self) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_format_kept(self) -> None:
        assert OutputManager(format=OutputFormat.RICH).format == OutputFormat.RICH

    def test_no_color_env_disables_color(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        OutputManager().error("bad")
        assert capsys.readouterr().err == "Error: bad\n"


class TestDiagnostics:
    def test_quiet_suppresses_info_but_not_errors(self, capsys) -> None:
        output = _plain(quiet=True)
        output.info("hello")
        output.success("done")
        output.suggest("try this")
        output.error("broken")
        err = capsys.readouterr().err
        assert "hello" not in err
        assert "done" not in err
        assert "try this" not in err
        assert "Error: broken" in err

    def test_debug_only_when_verbose(self, capsys) -> None:
        _plain().debug("hidden")
        _plain(verbose=True).debug("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "[debug] shown" in err

    def test_rich_console_escapes_markup(self, capsys) -> None:
        output = OutputManager(format=OutputFormat.PLAIN, verbose=True)
        output.debug("Cache hit: [weird]")
        assert "[debug] Cache hit: [weird]" in capsys.readouterr().err

    def test_diagnostics_never_touch_stdout(self, capsys) -> None:
        output = _plain(verbose=True)
        output.info("i")
        output.debug("d")
        output.error("e")
        assert capsys.readouterr().out == ""


class TestData:
    def test_print_list_plain(self, capsys) -> None:
        _plain().print_list("Location areas:", ["a", "b"])
        assert capsys.readouterr().out == "Location areas:\n - a\n - b\n"

    def test_print_table_plain(self, capsys) -> None:
        _plain().print_table(["a", "b"], [["1", "2"]], title="T")
        assert capsys.readouterr().out == "T\na\tb\n1\t2\n"

    def test_format_response_plain_is_json(self, capsys) -> None:
        _plain().format_response({"cache": {"ttl_seconds": 5}})
        assert json.loads(capsys.readouterr().out) == {"cache": {"ttl_seconds": 5}}


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_and_reset(self) -> None:
        output = _plain()
        set_output(output)
        assert get_output() is output
        reset_output()
        assert get_output() is not output
