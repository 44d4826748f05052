"""Tests for the REPL loop and input tokenizer."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from pokedex.commands import Session
from pokedex.repl import PROMPT, clean_input, run_repl

from conftest import SECOND_PAGE_URL


def _reader(lines: list[str], prompts: list[str] | None = None) -> Callable[[str], str]:
    """Return an ``input()`` stand-in that yields *lines* then raises EOFError."""
    remaining = iter(lines)

    def read_line(prompt: str) -> str:
        if prompts is not None:
            prompts.append(prompt)
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read_line


@pytest.fixture
def session(api_client, plain_output) -> Session:
    return Session(client=api_client)


class TestCleanInput:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("  hello  world  ", ["hello", "world"]),
            ("Charmander Bulbasaur PIKACHU", ["charmander", "bulbasaur", "pikachu"]),
            ("\tcatch\t pikachu\n", ["catch", "pikachu"]),
            ("", []),
            ("   ", []),
        ],
    )
    def test_clean_input(self, text: str, expected: list[str]) -> None:
        assert clean_input(text) == expected


class TestRunRepl:
    def test_end_of_input_returns(self, session) -> None:
        prompts: list[str] = []
        run_repl(session, _reader([], prompts))
        assert prompts == [PROMPT]

    def test_unknown_command_reprompts(self, session, capsys) -> None:
        prompts: list[str] = []
        run_repl(session, _reader(["fly", "help"], prompts))
        captured = capsys.readouterr()
        assert "invalid command" in captured.out
        assert "Welcome to the Pokedex help menu!" in captured.out
        assert len(prompts) == 3

    def test_blank_lines_are_ignored(self, session, capsys) -> None:
        run_repl(session, _reader(["", "   ", "help"]))
        captured = capsys.readouterr()
        assert "invalid command" not in captured.out
        assert "Welcome" in captured.out

    def test_commands_are_case_insensitive(self, session, capsys) -> None:
        run_repl(session, _reader(["MAP"]))
        assert " - canalave-city" in capsys.readouterr().out
        assert session.next_location_url == SECOND_PAGE_URL

    def test_usage_error_is_reported_and_loop_continues(self, session, capsys) -> None:
        run_repl(session, _reader(["explore", "mapb", "help"]))
        captured = capsys.readouterr()
        assert "Error: No location area provided" in captured.err
        assert "Error: You're on the first page" in captured.err
        assert "Welcome" in captured.out

    def test_network_error_keeps_session_state(self, session, mock_api, capsys) -> None:
        mock_api.routes[SECOND_PAGE_URL] = lambda request: httpx.Response(500)
        run_repl(session, _reader(["map", "map", "pokedex"]))
        captured = capsys.readouterr()
        assert "Error: HTTP 500" in captured.err
        assert session.next_location_url == SECOND_PAGE_URL
        assert "Your Pokedex is empty" in captured.out

    def test_decode_error_is_recoverable(self, session, mock_api, capsys) -> None:
        session.client.cache.add(session.client.base_url + "/pokemon/pikachu", b"garbage")
        run_repl(session, _reader(["catch pikachu", "help"]))
        captured = capsys.readouterr()
        assert "Error: Could not decode Pokemon" in captured.err
        assert "Welcome" in captured.out

    def test_unexpected_exception_is_reported(self, session, monkeypatch, capsys) -> None:
        def boom(*args: object) -> None:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(session.client, "get_pokemon", boom)
        run_repl(session, _reader(["catch pikachu", "help"]))
        captured = capsys.readouterr()
        assert "kaboom" in captured.err
        assert "Welcome" in captured.out

    def test_exit_stops_the_loop(self, session) -> None:
        prompts: list[str] = []
        with pytest.raises(SystemExit) as exc_info:
            run_repl(session, _reader(["exit", "help"], prompts))
        assert exc_info.value.code == 0
        assert len(prompts) == 1

    def test_arguments_are_passed_to_commands(self, session, capsys) -> None:
        run_repl(session, _reader(["explore Canalave-City"]))
        assert "Areas in canalave-city:" in capsys.readouterr().out

    def test_verbose_output_reports_cache_hits(self, session, capsys) -> None:
        run_repl(session, _reader(["explore canalave-city", "explore canalave-city"]))
        err = capsys.readouterr().err
        assert "[debug] Cache miss: GET" in err
        assert "[debug] Cache hit:" in err
