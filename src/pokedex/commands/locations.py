"""Location commands: ``map``, ``mapb``, and ``explore``.

``map`` and ``mapb`` walk the paginated ``/location/`` listing using the
``next``/``previous`` cursors the API returns. Because the cursors are used
verbatim as request URLs, going back and forth between pages within the
cache TTL never repeats a network call.
"""

from __future__ import annotations

from pokedex.commands.session import Session
from pokedex.exceptions import InvalidUsageError
from pokedex.models import LocationAreaList
from pokedex.output import print_list


def map_command(session: Session, *args: str) -> None:
    """Show the next page of locations and advance both cursors."""
    page = session.client.list_location_areas(session.next_location_url)
    _show_page(session, page)


def map_back_command(session: Session, *args: str) -> None:
    """Show the previous page of locations.

    Raises:
        InvalidUsageError: When the current page is the first one.
    """
    if session.previous_location_url is None:
        raise InvalidUsageError("You're on the first page")
    page = session.client.list_location_areas(session.previous_location_url)
    _show_page(session, page)


def explore_command(session: Session, *args: str) -> None:
    """List the areas inside one location.

    Raises:
        InvalidUsageError: Unless exactly one location name is given.
    """
    if len(args) != 1:
        raise InvalidUsageError("No location area provided")
    name = args[0]
    location = session.client.get_location(name)
    print_list(f"Areas in {name}:", [area.name for area in location.areas])


def _show_page(session: Session, page: LocationAreaList) -> None:
    print_list("Location areas:", [item.name for item in page.results])
    session.next_location_url = page.next
    session.previous_location_url = page.previous
