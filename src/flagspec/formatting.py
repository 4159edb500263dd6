## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from enum import Enum

from .types import OptionSpec, Directive, ShortOnly, LongOnly, ShortAndLong, Occurrence, ValueKind


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_option_name(name) -> str:
    match name:
        case ShortAndLong(short, long): return f"-{short}, --{long}"
        case ShortOnly(short): return f"-{short}"
        case LongOnly(long): return f"--{long}"
    raise TypeError(f"Not an option name: {name!r}")


_OCCURRENCE_MARK = {Occurrence.SINGLE: '', Occurrence.MULTI: '*', Occurrence.REQUIRED_ONE: '+'}
_VALUE_MARK = {ValueKind.NONE: '', ValueKind.REQUIRED: '=', ValueKind.OPTIONAL: '?='}

def _quote(text: str) -> str:
    return '"' + text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n') + '"'

def format_spec(item: OptionSpec | Directive) -> str:
    """Render a resolved item back in canonical clause syntax."""
    if isinstance(item, Directive):
        return f".{item.expression}"
    modifiers = _OCCURRENCE_MARK[item.occurrence] + _VALUE_MARK[item.value]
    if item.hint is not None:
        modifiers += ' ' + (item.hint if re.fullmatch(r'\w+', item.hint, re.ASCII) else _quote(item.hint))
    parts = [format_option_name(item.name), modifiers, _quote(item.description)]
    return ' '.join(p for p in parts if p)


def _format_arg(arg) -> str:
    if isinstance(arg, Enum): return f"{type(arg).__name__}.{arg.name}"
    return repr(arg)

def format_call(method: str, args: tuple) -> str:
    return f"\033[36m{method}\033[0m(" + ', '.join(_format_arg(a) for a in args) + ")"
