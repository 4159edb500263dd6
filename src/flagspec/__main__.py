## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# flagspec — Compile terse command-line option specifications into click option registries.
#

import sys
from dataclasses import dataclass

import click

from .types import OptionSpec, Directive
from .errors import FlagSpecError, FlagSpecParseError, OptionRejected, SpecNotFound
from .parser import format_parse_error_context
from .formatting import write_without_ansi, format_call, format_spec
from .registry import BaseOptions, ClickOptions, RecordingOptions
from .loader import load_spec
from . import api


@dataclass(frozen=True)
class CompileConfig:
    verbose: int
    strict: bool
    plain: bool


class SpecRunner:
    def __init__(self, config: CompileConfig):
        self.verbose = config.verbose
        self.strict = config.strict
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

    def _log(self, message: str) -> None:
        if self.verbose: print(f"\033[90m{message}\033[0m", file=sys.stderr)

    def _fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '') -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        sys.exit(1)

    def _handle_exception(self, exc: FlagSpecError, filename: str, source: str) -> None:
        if isinstance(exc, FlagSpecParseError):
            context = format_parse_error_context(exc.filename or filename, exc.line, exc.column, exc.token, source=source)
            context += f"\n\033[90m{str(exc).replace(chr(10), ' ').replace(chr(9), ' ')}\033[0m\n"
            self._fatal_error("SYNTAX ERROR.", f"Compiling `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context)
        elif isinstance(exc, OptionRejected):
            self._fatal_error("REGISTRY ERROR.", f"Registry refused a clause from `\033[97m{filename}\033[0m`: {exc}", type(exc).__name__)
        elif isinstance(exc, SpecNotFound):
            searched = '\n'.join(f"    \033[90m{c}\033[0m" for c in exc.candidates)
            self._fatal_error("LOOKUP ERROR.", f"Specification `\033[97m{exc.name}\033[0m` was not found; searched:", type(exc).__name__, searched + '\n')
        else:
            self._fatal_error("ERROR.", str(exc), type(exc).__name__)

    def load(self, name: str) -> tuple[str, str]:
        try:
            return load_spec(name)
        except SpecNotFound as exc:
            self._handle_exception(exc, name, '')

    def build(self, source: str, filename: str, registry: BaseOptions) -> tuple[list, BaseOptions]:
        """Resolve every clause, then emit into `registry`; any failure is reported and exits."""
        def _emitted(item: OptionSpec | Directive):
            self._log(f"emit  {format_spec(item)}")

        try:
            items = api.compile_spec(source, filename=filename, strict=self.strict)
            self._log(f"resolved {len(items)} clause(s) from {filename}")
            return items, api.emit(items, registry, on_emit=_emitted)
        except FlagSpecError as exc:
            self._handle_exception(exc, filename, source)


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--verbose', '-v', default=0, count=True, help='Echo each resolved clause as it is emitted.')
@click.option('--strict', is_flag=True, help='Reject duplicate option names before any registration.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, strict: bool, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = CompileConfig(verbose=verbose, strict=strict, plain=plain)


@cli.command('check')
@click.argument('spec')
@click.pass_context
def check(ctx: click.Context, spec: str) -> None:
    """Compile SPEC into a click registry and report success."""
    runner = SpecRunner(ctx.obj['config'])
    source, filename = runner.load(spec)
    items, _ = runner.build(source, filename, ClickOptions())
    n_options = sum(isinstance(it, OptionSpec) for it in items)
    print(f"\033[97m\033[48;5;30m OK. \033[0m {filename}: {n_options} option(s), {len(items) - n_options} directive(s)")


@cli.command('dump')
@click.argument('spec')
@click.pass_context
def dump(ctx: click.Context, spec: str) -> None:
    """Print the ordered registry calls SPEC compiles to, without building anything."""
    runner = SpecRunner(ctx.obj['config'])
    source, filename = runner.load(spec)
    _, registry = runner.build(source, filename, RecordingOptions())
    for method, args in registry.calls:
        print(format_call(method, args))


@cli.command('usage')
@click.argument('spec')
@click.option('--brief', default=None, help='Text shown above the option list.')
@click.option('--prog', default=None, help='Program name used in the usage line.')
@click.pass_context
def usage(ctx: click.Context, spec: str, brief: str | None, prog: str | None) -> None:
    """Render the help text of the command SPEC describes."""
    runner = SpecRunner(ctx.obj['config'])
    source, filename = runner.load(spec)
    _, registry = runner.build(source, filename, ClickOptions())
    print(registry.usage(brief, prog=prog))


def main(argv: list[str] | None = None) -> None:
    cli.main(args=list(sys.argv[1:] if argv is None else argv), prog_name='flagspec')


if __name__ == "__main__":
    main()
