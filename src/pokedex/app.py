"""Typer application and CLI entry point for pokedex.

Running ``pokedex`` with no sub-command resolves the configuration, builds
a :class:`~pokedex.client.PokeAPIClient` (and with it the response cache
and its reaper thread), and hands control to the REPL. The ``config``
sub-command group manages the persisted defaults.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`pokedex.config`: Settings resolution.
    :mod:`pokedex.repl`: The interactive loop.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from pokedex import __version__
from pokedex.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="pokedex",
    help="Explore the PokeAPI from an interactive prompt.",
    invoke_without_command=True,
    add_completion=False,
    rich_markup_mode="rich",
)

from pokedex.cli.config import config_app  # noqa: E402

app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"pokedex {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="PokeAPI base URL."
    ),
    ttl: Optional[float] = typer.Option(
        None, "--ttl", help="Response cache TTL in seconds (also the sweep period)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="HTTP request timeout in seconds."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output (cache hits and misses)."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~pokedex.output.OutputManager` from the CLI
    flags. When no sub-command was given, starts the REPL.
    """
    from pokedex.output import OutputManager, set_output

    output = OutputManager(
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)

    if ctx.invoked_subcommand is None:
        _start_session(base_url, ttl, timeout)


def _start_session(
    base_url: Optional[str],
    ttl: Optional[float],
    timeout: Optional[float],
) -> None:
    """Resolve settings, open the client, and run the REPL until it returns."""
    from pokedex.client import PokeAPIClient
    from pokedex.commands import Session
    from pokedex.config import resolve_config
    from pokedex.output import debug
    from pokedex.repl import run_repl

    config = resolve_config(cli_base_url=base_url, cli_ttl=ttl, cli_timeout=timeout)
    debug(
        f"Using {config.base_url} (cache ttl {config.cache.ttl_seconds:g}s, "
        f"timeout {config.request.timeout:g}s)"
    )

    with PokeAPIClient(
        base_url=config.base_url,
        cache_ttl=config.cache.ttl_seconds,
        timeout=config.request.timeout,
    ) as client:
        run_repl(Session(client=client))


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to ``<data_dir>/logs`` and return its path."""
    from pokedex.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``pokedex`` console script.

    :class:`~pokedex.exceptions.PokedexError` instances that escape (for
    example an invalid config file) cause a clean exit with the error's
    ``exit_code``. All other exceptions produce a crash log and a generic
    failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from pokedex.exceptions import PokedexError
        from pokedex.output import error

        if isinstance(exc, PokedexError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
