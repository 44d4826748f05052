"""Housekeeping commands: ``help``, ``cache``, and ``exit``."""

from __future__ import annotations

import sys

from pokedex.commands.session import Session
from pokedex.exit_codes import EXIT_SUCCESS
from pokedex.output import print_data, print_table


def help_command(session: Session, *args: str) -> None:
    """List every registered command with its description."""
    from pokedex.commands import get_commands

    print_data("Welcome to the Pokedex help menu!")
    print_data("Here are your available commands:")
    for cmd in get_commands().values():
        print_data(f" - {cmd.usage}: {cmd.description}")
    print_data("")


def cache_command(session: Session, *args: str) -> None:
    """Show the size and TTL of the response cache."""
    stats = session.client.cache.stats()
    print_table(
        ["entries", "ttl_seconds", "reaper"],
        [[
            str(stats["size"]),
            f"{stats['ttl_seconds']:g}",
            "running" if stats["running"] else "stopped",
        ]],
        title="Response cache",
    )


def exit_command(session: Session, *args: str) -> None:
    """Leave the REPL immediately with exit code 0."""
    sys.exit(EXIT_SUCCESS)
