"""REPL command registry.

Each command is a :class:`Command` whose callback receives the
:class:`~pokedex.commands.session.Session` and the positional arguments
typed after the command name. Callbacks report results through
:mod:`pokedex.output` and raise :class:`~pokedex.exceptions.PokedexError`
subclasses for anything the user should see as an error.

The registry is rebuilt by :func:`get_commands` on every lookup, so the
``help`` listing always matches what the dispatcher accepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pokedex.commands.session import Session

CommandCallback = Callable[..., None]


@dataclass(frozen=True)
class Command:
    """A named REPL command.

    Attributes:
        name: The word typed to invoke the command.
        usage: Name plus argument placeholders, shown by ``help``.
        description: One-line help text.
        callback: ``callback(session, *args)``.
    """

    name: str
    usage: str
    description: str
    callback: CommandCallback


def get_commands() -> dict[str, Command]:
    """Return the available commands keyed by name, in ``help`` order."""
    from pokedex.commands.general import cache_command, exit_command, help_command
    from pokedex.commands.locations import explore_command, map_back_command, map_command
    from pokedex.commands.pokemon import catch_command, inspect_command, pokedex_command

    commands = [
        Command("help", "help", "Prints the help menu", help_command),
        Command("map", "map", "Lists the next page of location areas", map_command),
        Command("mapb", "mapb", "Lists the previous page of location areas", map_back_command),
        Command("explore", "explore {location}", "Lists the areas in a location", explore_command),
        Command(
            "catch",
            "catch {pokemon_name}",
            "Attempt to catch a pokemon and add it to your pokedex",
            catch_command,
        ),
        Command("inspect", "inspect {pokemon_name}", "Shows details of a caught pokemon", inspect_command),
        Command("pokedex", "pokedex", "Lists the pokemon you have caught", pokedex_command),
        Command("cache", "cache", "Shows response cache statistics", cache_command),
        Command("exit", "exit", "Turns off the pokedex", exit_command),
    ]
    return {cmd.name: cmd for cmd in commands}


__all__ = ["Command", "Session", "get_commands"]
