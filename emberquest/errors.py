"""Error reporting and shared helpers for reading configuration files."""

from __future__ import annotations

import sys
from pathlib import Path


class ConfigError(Exception):
    """Raised when a configuration file cannot be opened, read or parsed."""


def report(*args: object) -> str:
    """Write the concatenated arguments to standard error and return them."""
    message = "".join(str(arg) for arg in args)
    sys.stderr.write(message)
    return message


def read_first_line(path: str | Path) -> str:
    """Return the first line of ``path``, newline included.

    Raises ConfigError when the file cannot be opened or holds no line.
    """
    try:
        with open(path, encoding="utf-8") as stream:
            line = stream.readline()
    except OSError as exc:
        raise ConfigError(f"Fail openning: {path}") from exc
    if not line:
        raise ConfigError("Fail reading line")
    return line


def is_eof(line: str | None) -> bool:
    """Tell whether ``line`` marks the end of a block: missing or empty."""
    if line is None:
        return True
    if line.endswith("\n"):
        line = line[:-1]
    return line == ""