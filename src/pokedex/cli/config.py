"""Config commands -- view and modify the persisted defaults.

Provides the ``pokedex config`` sub-command group for reading, updating,
and resetting the user's config file (:class:`~pokedex.models.GlobalConfig`).
The file only holds defaults (base URL, cache TTL, request timeout); it
never stores session data.
"""

from __future__ import annotations

import typer

from pokedex.exit_codes import EXIT_INVALID_USAGE
from pokedex.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False,
        "--effective",
        help="Show the settings after applying environment overrides.",
    ),
) -> None:
    """Show the current configuration.

    Example::

        pokedex config show
        pokedex config show --effective
    """
    from pokedex.config import config_path, load_global_config, resolve_config

    config = resolve_config() if effective else load_global_config()
    info(f"Config file: {config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g. 'cache.ttl_seconds')."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced by validating the updated config against
    :class:`~pokedex.models.GlobalConfig` before saving.

    Raises:
        typer.Exit: With code 2 if the key path is unknown or the value is
            rejected by validation.

    Example::

        pokedex config set cache.ttl_seconds 300
        pokedex config set request.timeout 10
    """
    from pydantic import ValidationError

    from pokedex.config import load_global_config, save_global_config
    from pokedex.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if not isinstance(target.get(k), dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Invalid config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    target[final_key] = value

    try:
        updated = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Invalid value for {key}: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    save_global_config(updated)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset() -> None:
    """Delete the config file so that built-in defaults apply again."""
    from pokedex.config import reset_global_config

    reset_global_config()
    success("Configuration reset to defaults.")
