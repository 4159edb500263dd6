## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Classifies each option clause into a name shape and one of nine occurrence/value semantics.
#

from .types import (Token, OptionClause, DirectiveClause, OptionSpec, Directive,
                    ShortOnly, LongOnly, ShortAndLong, OptionName, Occurrence, ValueKind, join_long)
from .parser import decode_string
from .errors import MalformedOptionName, MalformedModifier, DuplicateOptionName


OCCURRENCE_MARKERS = {'STAR': Occurrence.MULTI, 'PLUS': Occurrence.REQUIRED_ONE}
VALUE_MARKERS = {'EQUALS': ValueKind.REQUIRED, 'MAYBE_EQUALS': ValueKind.OPTIONAL}
NAME_TOKENS = {'SHORT', 'LONG', 'COMMA'}


def _types(tokens) -> tuple[str, ...]:
    return tuple(t.type for t in tokens)


def _long_words(tokens: tuple[Token, ...], i: int) -> tuple[list[str], int]:
    """Consume WORD (SHORT WORD)* starting at `i`, as in `ignore-partial`."""
    words = [tokens[i].value]
    i += 1
    while i + 1 < len(tokens) and _types(tokens[i:i+2]) == ('SHORT', 'WORD'):
        words.append(tokens[i+1].value)
        i += 2
    return words, i


def resolve_name(tokens: tuple[Token, ...]) -> tuple[OptionName, tuple[Token, ...]]:
    """Longest-match-first over the three name shapes; returns the name and the remaining tokens."""
    kinds = _types(tokens)

    if kinds[:2] == ('SHORT', 'WORD'):
        short, i = tokens[1].value, 2
        if len(short) != 1 or not short.isalnum():
            raise MalformedOptionName(f"Short option `-{short}` must be a single letter or digit.", token=tokens[1])
        if i < len(kinds) and kinds[i] == 'COMMA': i += 1
        if kinds[i:i+2] == ('LONG', 'WORD'):
            words, i = _long_words(tokens, i + 1)
            return ShortAndLong(short, join_long(words)), tokens[i:]
        if kinds[i-1] == 'COMMA':
            raise MalformedOptionName(f"Expected `--long` name after `-{short},`.", token=tokens[i-1])
        return ShortOnly(short), tokens[i:]

    if kinds[:2] == ('LONG', 'WORD'):
        words, i = _long_words(tokens, 1)
        return LongOnly(join_long(words)), tokens[i:]

    token = tokens[0] if tokens else None
    raise MalformedOptionName(f"Expected `-s`, `--long` or `-s --long` option name, found `{token.value if token else ''}`.", token=token)


def resolve_modifiers(tokens: tuple[Token, ...]) -> tuple[Occurrence, ValueKind, str | None]:
    """Table lookup: optional occurrence marker, then optional value marker with exactly one hint."""
    kinds, i = _types(tokens), 0
    if kinds and kinds[0] in NAME_TOKENS:
        raise MalformedOptionName(f"Unexpected `{tokens[0].value}` after option name.", token=tokens[0])

    occurrence = Occurrence.SINGLE
    if i < len(kinds) and kinds[i] in OCCURRENCE_MARKERS:
        occurrence = OCCURRENCE_MARKERS[kinds[i]]; i += 1

    value, hint = ValueKind.NONE, None
    if i < len(kinds) and kinds[i] in VALUE_MARKERS:
        value = VALUE_MARKERS[kinds[i]]; i += 1
        if i >= len(kinds) or kinds[i] not in ('WORD', 'STRING'):
            found = tokens[i] if i < len(kinds) else None
            raise MalformedModifier(f"Expected value hint after `{tokens[i-1].value}`, found `{found.value if found else ''}`.", token=found or tokens[i-1])
        hint = tokens[i].value if kinds[i] == 'WORD' else decode_string(tokens[i])
        i += 1

    if i < len(kinds):
        raise MalformedModifier(f"Unrecognized modifier `{tokens[i].value}`; expected `*`, `+`, `= HINT` or `?= HINT`.", token=tokens[i])
    return occurrence, value, hint


def resolve(clause: OptionClause | DirectiveClause) -> OptionSpec | Directive:
    if isinstance(clause, DirectiveClause):
        return Directive(clause.expression, meta=clause.meta)

    *body, desc = clause.tokens
    try:
        name, rest = resolve_name(tuple(body))
        occurrence, value, hint = resolve_modifiers(rest)
    except (MalformedOptionName, MalformedModifier) as exc:
        exc.clause, exc.meta = clause.index, clause.meta
        exc.filename = clause.meta.get('filename')
        # Errors carry the offending Token; report its position and its text.
        tok = exc.token if isinstance(exc.token, Token) else clause.tokens[0]
        exc.line, exc.column, exc.token = tok.line, tok.column, tok.value
        exc.args = (f"{exc.args[0]} In clause `{clause.meta.get('text', '')}`.",)
        raise
    return OptionSpec(name, occurrence, value, hint, decode_string(desc), meta=clause.meta)


def resolve_all(clauses) -> list[OptionSpec | Directive]:
    return [resolve(c) for c in clauses]


def check_duplicates(items) -> None:
    """Fail before emission when two clauses claim the same short or long name."""
    seen = {}
    for item in items:
        if not isinstance(item, OptionSpec): continue
        for flag in (f"-{item.short}" if item.short else None, f"--{item.long}" if item.long else None):
            if flag is None: continue
            if flag in seen:
                meta = item.meta
                raise DuplicateOptionName(
                    f"Option `{flag}` already declared by clause `{seen[flag].meta.get('text', '')}`.",
                    filename=meta.get('filename'), line=meta.get('line'), column=meta.get('column'),
                    token=flag.lstrip('-'), meta=meta)
            seen[flag] = item
