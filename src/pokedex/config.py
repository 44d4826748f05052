"""Configuration management with XDG paths, atomic writes, and precedence resolution.

pokedex keeps a single small JSON file of defaults
(:class:`~pokedex.models.GlobalConfig`): the API base URL, the cache TTL,
and the request timeout. Nothing from a session (cursors, caught Pokemon,
cached responses) is ever written here.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.pokedex/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and the config file into the effective settings.

Writes use a temp-file-then-rename strategy (:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from pokedex.exceptions import ConfigError
from pokedex.models import GlobalConfig

_APP_NAME = "pokedex"
_CONFIG_FILENAME = "config.json"

ENV_BASE_URL = "POKEDEX_BASE_URL"
ENV_CACHE_TTL = "POKEDEX_CACHE_TTL"
ENV_TIMEOUT = "POKEDEX_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/pokedex/`` (default ``~/.config/pokedex/``).
    On macOS/Windows: ``~/.pokedex/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory used for crash logs, creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/pokedex/`` (default ``~/.local/share/pokedex/``).
    On macOS/Windows: ``~/.pokedex/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a sibling temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration.

    Returns:
        The deserialised :class:`~pokedex.models.GlobalConfig`, or a default
        instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            validation.
    """
    path = config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically."""
    data = config.model_dump(mode="json")
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


def reset_global_config() -> None:
    """Delete the config file so that defaults apply again."""
    path = config_path()
    if path.is_file():
        path.unlink()


# --- Precedence resolution ---


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"Environment variable {name} must be a number, got {raw!r}") from exc


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_ttl: Optional[float] = None,
    cli_timeout: Optional[float] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``--base-url``, ``--ttl``, ``--timeout``)
        2. Environment variables (``POKEDEX_BASE_URL``, ``POKEDEX_CACHE_TTL``,
           ``POKEDEX_TIMEOUT``)
        3. User config (``~/.config/pokedex/config.json``)
        4. Defaults

    Raises:
        ConfigError: If any layer supplies an invalid value.
    """
    data = load_global_config().model_dump()

    env_base_url = os.environ.get(ENV_BASE_URL)
    env_ttl = _env_float(ENV_CACHE_TTL)
    env_timeout = _env_float(ENV_TIMEOUT)

    base_url = cli_base_url or env_base_url
    if base_url:
        data["base_url"] = base_url
    ttl = cli_ttl if cli_ttl is not None else env_ttl
    if ttl is not None:
        data["cache"]["ttl_seconds"] = ttl
    timeout = cli_timeout if cli_timeout is not None else env_timeout
    if timeout is not None:
        data["request"]["timeout"] = timeout

    try:
        config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    config.base_url = config.base_url.rstrip("/")
    return config
