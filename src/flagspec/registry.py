## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Options registries: the getopts-style builder that compiled specifications are emitted into.
#

import ast
from enum import Enum
from typing import Any, Callable

import click

from .errors import OptionRejected


class HasArg(Enum):
    YES = 'yes'
    NO = 'no'
    MAYBE = 'maybe'

class Occur(Enum):
    REQ = 'req'
    OPTIONAL = 'optional'
    MULTI = 'multi'

class ParsingStyle(Enum):
    FLOATING_FREES = 'floating_frees'
    STOP_AT_FIRST_FREE = 'stop_at_first_free'


class BaseOptions:
    """Registry contract: one low-level `opt` primitive, seven shortcuts, and raw directives."""

    def opt(self, short: str, long: str, desc: str, hint: str, has_arg: HasArg, occur: Occur):
        raise NotImplementedError

    def directive(self, expression: str):
        raise NotImplementedError

    def _native(self, method: str, short, long, desc, hint, has_arg, occur):
        return self.opt(short, long, desc, hint, has_arg, occur)

    # Native primitives ───────────────────────────────────────────────────────────────────────
    def optflag(self, short: str, long: str, desc: str):
        return self._native('optflag', short, long, desc, "", HasArg.NO, Occur.OPTIONAL)

    def optflagmulti(self, short: str, long: str, desc: str):
        return self._native('optflagmulti', short, long, desc, "", HasArg.NO, Occur.MULTI)

    def reqflag(self, short: str, long: str, desc: str):
        return self._native('reqflag', short, long, desc, "", HasArg.NO, Occur.REQ)

    def optopt(self, short: str, long: str, desc: str, hint: str):
        return self._native('optopt', short, long, desc, hint, HasArg.YES, Occur.OPTIONAL)

    def optmulti(self, short: str, long: str, desc: str, hint: str):
        return self._native('optmulti', short, long, desc, hint, HasArg.YES, Occur.MULTI)

    def reqopt(self, short: str, long: str, desc: str, hint: str):
        return self._native('reqopt', short, long, desc, hint, HasArg.YES, Occur.REQ)

    def optflagopt(self, short: str, long: str, desc: str, hint: str):
        return self._native('optflagopt', short, long, desc, hint, HasArg.MAYBE, Occur.OPTIONAL)


class RecordingOptions(BaseOptions):
    """Dry-run registry that only records the calls it receives, in order."""

    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []

    def _native(self, method, short, long, desc, hint, has_arg, occur):
        args = (short, long, desc) if has_arg is HasArg.NO else (short, long, desc, hint)
        self.calls.append((method, args))
        return self

    def opt(self, short, long, desc, hint, has_arg, occur):
        self.calls.append(('opt', (short, long, desc, hint, has_arg, occur)))
        return self

    def directive(self, expression):
        self.calls.append(('directive', (expression,)))
        return self


def _exactly_once(ctx: click.Context, param: click.Parameter, value: int) -> bool:
    if value == 0:
        raise click.MissingParameter(ctx=ctx, param=param)
    if value > 1:
        raise click.BadParameter("must be given exactly once.", ctx=ctx, param=param)
    return True

def _at_most_once(ctx: click.Context, param: click.Parameter, value: tuple) -> str | None:
    """Values are collected with `multiple` so that repeats can be refused, then unwrapped."""
    if len(value) > 1:
        raise click.BadParameter("must not be given more than once.", ctx=ctx, param=param)
    return value[0] if value else None


class ClickOptions(BaseOptions):
    """Accumulates `click.Option` objects; click owns argv tokenizing, matching and help rendering."""

    DIRECTIVES = ('parsing_style', 'help', 'epilog', 'name', 'context_settings')
    FREE_ARGUMENT = 'free'

    def __init__(self):
        self.params: list[click.Option] = []
        self.style = ParsingStyle.FLOATING_FREES
        self.help_text: str | None = None
        self.epilog_text: str | None = None
        self.command_name: str | None = None
        self.settings: dict[str, Any] = {}
        self._names: set[str] = set()

    def opt(self, short, long, desc, hint, has_arg, occur):
        if not short and not long:
            raise OptionRejected("Option needs a short or a long name.")
        if len(short) > 1:
            raise OptionRejected(f"Short name `{short}` must be a single character.")
        decls = [f"-{short}"] * bool(short) + [f"--{long}"] * bool(long)
        if (taken := self._names.intersection(decls)):
            raise OptionRejected(f"Option `{sorted(taken)[0]}` is already registered.")
        if long.replace('-', '_').lower() == self.FREE_ARGUMENT:
            raise OptionRejected(f"Option `--{long}` clashes with the `{self.FREE_ARGUMENT}` arguments.")

        kwargs: dict[str, Any] = {'help': desc}
        match has_arg:
            case HasArg.NO if occur is Occur.OPTIONAL:
                kwargs.update(is_flag=True)
            case HasArg.NO if occur is Occur.MULTI:
                kwargs.update(count=True)
            case HasArg.NO:
                kwargs.update(count=True, callback=_exactly_once)
            case HasArg.YES | HasArg.MAYBE:
                kwargs.update(metavar=hint or None, multiple=True, required=occur is Occur.REQ)
                if occur is not Occur.MULTI:
                    kwargs.update(callback=_at_most_once)
                if has_arg is HasArg.MAYBE:
                    # Given without a value, the option is present with an empty string.
                    kwargs.update(is_flag=False, flag_value="")

        self.params.append(click.Option(decls, **kwargs))
        self._names.update(decls)
        return self

    # Directives ──────────────────────────────────────────────────────────────────────────────
    def directive(self, expression: str):
        """Interpret `name(literal, ...)` as a call to one of the registry's directive methods."""
        try:
            node = ast.parse(expression, mode='eval').body
        except SyntaxError as exc:
            raise OptionRejected(f"Directive `{expression}` is not a call expression.") from exc
        if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Name) or node.func.id not in self.DIRECTIVES:
            raise OptionRejected(f"Unknown directive `{expression}`; expected one of {', '.join(self.DIRECTIVES)}.")
        try:
            args = [ast.literal_eval(a) for a in node.args]
            kwargs = {k.arg: ast.literal_eval(k.value) for k in node.keywords}
        except ValueError as exc:
            raise OptionRejected(f"Directive `{expression}` only accepts literal arguments.") from exc
        getattr(self, node.func.id)(*args, **kwargs)
        return self

    def parsing_style(self, style: ParsingStyle | str):
        try:
            self.style = ParsingStyle(style)
        except ValueError:
            raise OptionRejected(f"Unknown parsing style `{style}`.") from None
        return self

    def help(self, text: str):
        self.help_text = text
        return self

    def epilog(self, text: str):
        self.epilog_text = text
        return self

    def name(self, name: str):
        self.command_name = name
        return self

    def context_settings(self, **settings):
        self.settings.update(settings)
        return self

    # Materialization ─────────────────────────────────────────────────────────────────────────
    def command(self, callback: Callable | None = None, name: str | None = None) -> click.Command:
        settings = {'allow_interspersed_args': self.style is ParsingStyle.FLOATING_FREES, **self.settings}
        params = [*self.params, click.Argument([self.FREE_ARGUMENT], nargs=-1)]
        return click.Command(name or self.command_name or 'program', params=params, callback=callback,
                             help=self.help_text, epilog=self.epilog_text, context_settings=settings)

    def usage(self, brief: str | None = None, prog: str | None = None) -> str:
        cmd = self.command(name=prog)
        if brief is not None: cmd.help = brief
        with click.Context(cmd, info_name=cmd.name) as ctx:
            return cmd.get_help(ctx)

    def parse(self, args: list[str], prog: str | None = None) -> dict[str, Any]:
        """Match `args` with click and return the resulting parameter values."""
        cmd = self.command(name=prog)
        with cmd.make_context(cmd.name, list(args)) as ctx:
            return dict(ctx.params)
