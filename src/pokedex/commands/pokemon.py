"""Pokemon commands: ``catch``, ``inspect``, and ``pokedex``.

The catch mechanic draws an integer uniformly from
``[0, base_experience)`` and succeeds when the draw is at most
:data:`CATCH_THRESHOLD`. Pokemon with at most 50 base experience are
therefore always caught, and rarer ones get harder.
"""

from __future__ import annotations

from pokedex.commands.session import Session
from pokedex.exceptions import InvalidUsageError
from pokedex.models import Pokemon
from pokedex.output import debug, print_data, print_list, suggest

CATCH_THRESHOLD = 50


def catch_roll(session: Session, pokemon: Pokemon) -> int:
    """Draw the catch roll for *pokemon*; ``0`` when it has no base experience."""
    if pokemon.base_experience <= 0:
        return 0
    return session.rng.randrange(pokemon.base_experience)


def catch_command(session: Session, *args: str) -> None:
    """Try to catch a Pokemon. A miss is a normal outcome, not an error.

    Raises:
        InvalidUsageError: Unless exactly one Pokemon name is given.
    """
    if len(args) != 1:
        raise InvalidUsageError("No pokemon name provided")
    name = args[0]
    pokemon = session.client.get_pokemon(name)

    print_data(f"Throwing a Pokeball at {name}...")
    roll = catch_roll(session, pokemon)
    debug(f"base experience {pokemon.base_experience}, roll {roll}, threshold {CATCH_THRESHOLD}")
    if roll > CATCH_THRESHOLD:
        print_data(f"{name} escaped!")
        return

    session.caught[name] = pokemon
    print_data(f"{name} was caught!")
    suggest(f"Use 'inspect {name}' to see its details")


def inspect_command(session: Session, *args: str) -> None:
    """Show height, weight, stats, and types of a caught Pokemon.

    Raises:
        InvalidUsageError: Unless exactly one Pokemon name is given.
    """
    if len(args) != 1:
        raise InvalidUsageError("No pokemon name provided")
    pokemon = session.caught.get(args[0])
    if pokemon is None:
        print_data("you have not caught that pokemon")
        return

    print_data(f"Name: {pokemon.name}")
    print_data(f"Height: {pokemon.height}")
    print_data(f"Weight: {pokemon.weight}")
    print_data("Stats:")
    for stat in pokemon.stats:
        print_data(f"  -{stat.stat.name}: {stat.base_stat}")
    print_data("Types:")
    for slot in pokemon.types:
        print_data(f"  - {slot.type.name}")


def pokedex_command(session: Session, *args: str) -> None:
    """List caught Pokemon in the order they were caught."""
    if not session.caught:
        print_data("Your Pokedex is empty. Try 'catch {pokemon_name}'.")
        return
    print_list("Your Pokedex:", list(session.caught))
