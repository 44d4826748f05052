"""The interactive read-eval-print loop.

:func:`run_repl` reads one line at a time, tokenizes it with
:func:`clean_input`, looks the first word up in the command registry, and
invokes the command with the remaining words as positional arguments.

Errors never end the session: a :class:`~pokedex.exceptions.PokedexError`
from a command (bad arguments, HTTP failure, undecodable response) is
reported and the prompt comes back with the session state untouched. The
loop ends on the ``exit`` command or at end of input.
"""

from __future__ import annotations

from typing import Callable

from pokedex.commands import Session, get_commands
from pokedex.exceptions import PokedexError
from pokedex.output import debug, error, print_data, suggest

PROMPT = "Pokedex > "


def clean_input(text: str) -> list[str]:
    """Lowercase *text* and split it on runs of whitespace."""
    return text.lower().split()


def run_repl(session: Session, read_line: Callable[[str], str] = input) -> None:
    """Run the command loop until ``exit`` or end of input.

    Args:
        session: State shared by all commands.
        read_line: Prompt-and-read function; :func:`input` in production.
    """
    commands = get_commands()
    while True:
        try:
            line = read_line(PROMPT)
        except EOFError:
            print_data("")
            return

        words = clean_input(line)
        if not words:
            continue

        name, args = words[0], words[1:]
        command = commands.get(name)
        if command is None:
            print_data("invalid command")
            suggest("Type 'help' to list the available commands")
            continue

        debug(f"Running '{name}' with args {args}")
        try:
            command.callback(session, *args)
        except PokedexError as exc:
            error(str(exc))
        except Exception as exc:
            error(f"'{name}' failed unexpectedly: {exc!r}")
