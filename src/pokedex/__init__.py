"""pokedex -- an interactive command-line explorer for the PokeAPI.

The package wraps the public `PokeAPI <https://pokeapi.co/>`_ in a small
REPL. Users page through locations, explore a location's areas, and try to
catch Pokemon, which are kept in memory for the session.

Typical session::

    $ pokedex
    Pokedex > map
    Pokedex > explore canalave-city
    Pokedex > catch pikachu
    Pokedex > exit

Responses are held in an in-memory :class:`~pokedex.cache.ExpiringCache`
so that repeated requests within the TTL never touch the network.

Modules:
    app: Typer application and console-script entry point.
    repl: The read-eval-print loop and input tokenizer.
    commands: REPL command registry and session state.
    client: The caching PokeAPI client.
    cache: Thread-safe expiring cache with a background reaper.
    models: Pydantic models for API records and configuration.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
