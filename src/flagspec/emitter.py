## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .types import OptionSpec, Directive, Occurrence, ValueKind
from .registry import BaseOptions
from . import extension


NATIVE_PRIMITIVES: dict[tuple[Occurrence, ValueKind], str] = {
    (Occurrence.SINGLE, ValueKind.NONE): 'optflag',
    (Occurrence.MULTI, ValueKind.NONE): 'optflagmulti',
    (Occurrence.REQUIRED_ONE, ValueKind.NONE): 'reqflag',
    (Occurrence.SINGLE, ValueKind.REQUIRED): 'optopt',
    (Occurrence.MULTI, ValueKind.REQUIRED): 'optmulti',
    (Occurrence.REQUIRED_ONE, ValueKind.REQUIRED): 'reqopt',
    (Occurrence.SINGLE, ValueKind.OPTIONAL): 'optflagopt',
}

EXTENSIONS: dict[tuple[Occurrence, ValueKind], Callable] = {
    (Occurrence.MULTI, ValueKind.OPTIONAL): extension.optflagmultiopt,
    (Occurrence.REQUIRED_ONE, ValueKind.OPTIONAL): extension.optflagreqopt,
}


def emit_one(item: OptionSpec | Directive, registry: BaseOptions):
    if isinstance(item, Directive):
        return registry.directive(item.expression)

    key = (item.occurrence, item.value)
    args = (item.short, item.long, item.description)
    if item.value is not ValueKind.NONE:
        args += (item.hint,)
    if item.requires_extension:
        return EXTENSIONS[key](registry, *args)
    return getattr(registry, NATIVE_PRIMITIVES[key])(*args)


def emit(items: list[OptionSpec | Directive], registry: BaseOptions, on_emit: Callable | None = None) -> BaseOptions:
    """Apply resolved items to `registry` in order; registry errors propagate and stop the sequence."""
    for item in items:
        emit_one(item, registry)
        if on_emit is not None: on_emit(item)
    return registry
