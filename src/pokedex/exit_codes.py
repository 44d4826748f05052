"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~pokedex.exceptions.PokedexError` subclass. Inside
the REPL these errors are reported and the session continues; the codes
only reach the shell when an error escapes the entry point.
"""

EXIT_SUCCESS = 0
"""The session ended normally (``exit`` command or end of input)."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""A command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP error status other than 404."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""A response body (fresh or cached) could not be decoded into a record."""

EXIT_INTERRUPTED = 130
"""The session was cancelled with Ctrl-C."""
