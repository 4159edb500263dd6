## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

import click

from .types import OptionSpec, Directive
from .errors import *
from .parser import tokenize
from .resolver import resolve_all, check_duplicates
from .emitter import emit
from .registry import BaseOptions, ClickOptions, RecordingOptions, HasArg, Occur, ParsingStyle


def compile_spec(source: str, filename: str | None = None, strict: bool = False) -> list[OptionSpec | Directive]:
    """Tokenize and resolve every clause up front, so no registry call happens for a malformed spec."""
    items = resolve_all(tokenize(source, filename=filename))
    if strict:
        check_duplicates(items)
    return items


def options(source: str, registry: BaseOptions | None = None, filename: str | None = None,
            strict: bool = False) -> BaseOptions:
    items = compile_spec(source, filename=filename, strict=strict)
    return emit(items, ClickOptions() if registry is None else registry)


def command(source: str, name: str | None = None, strict: bool = False) -> Callable[[Callable], click.Command]:
    """Decorator building a `click.Command` from the specification when the function is defined."""
    def decorator(fn: Callable) -> click.Command:
        registry = options(source, filename=f"<{fn.__name__}>", strict=strict)
        return registry.command(callback=fn, name=name or registry.command_name or fn.__name__.replace('_', '-'))
    return decorator
