from __future__ import annotations

from typing import Dict, NoReturn, Optional, Sequence

import typer

NO_KEY_PREFIX = "--NoKey"

ParsedArgs = Dict[str, str]


class DuplicateOptionError(ValueError):
    def __init__(self, key: str):
        super().__init__(f"Option {key} was given more than once")
        self.key = key


def parse(args: Sequence[str]) -> ParsedArgs:
    """Parse a command line of the form "--param value" or "-p value".

    An option found without a matching value maps to an empty string. A value
    found without a matching option is stored under "--NoKeyN", where N counts
    such values from zero. Repeating a key raises DuplicateOptionError.
    """
    parsed: ParsedArgs = {}
    i, n = 0, 0
    while i < len(args):
        if args[i].startswith("-"):
            key = args[i]
            i += 1
            value = ""
            if i < len(args) and not args[i].startswith("-"):
                value = args[i]
                i += 1
        else:
            key = f"{NO_KEY_PREFIX}{n}"
            value = args[i]
            i += 1
            n += 1

        if key in parsed:
            raise DuplicateOptionError(key)
        parsed[key] = value
    return parsed


def get_parameter(parsed: ParsedArgs, default: Optional[str], *keys: str) -> Optional[str]:
    """Return the value of the first of ``keys`` present in ``parsed``, else ``default``."""
    for key in keys:
        if key in parsed:
            return parsed[key]
    return default


def error_exit(msg: str, code: int = 1) -> NoReturn:
    typer.echo("\nError", err=True)
    typer.echo(msg, err=True)
    raise typer.Exit(code)
