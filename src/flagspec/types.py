## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    line: int = 0
    column: int = 0
    start: int = 0
    end: int = 0


# Clauses ───────────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OptionClause:
    tokens: tuple[Token, ...]
    index: int
    meta: dict = field(default_factory=dict, compare=False)

@dataclass(frozen=True)
class DirectiveClause:
    expression: str
    index: int
    meta: dict = field(default_factory=dict, compare=False)


# Option names ──────────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ShortOnly:
    short: str

    @property
    def long(self) -> str: return ""

@dataclass(frozen=True)
class LongOnly:
    long: str

    @property
    def short(self) -> str: return ""

@dataclass(frozen=True)
class ShortAndLong:
    short: str
    long: str


OptionName = ShortOnly | LongOnly | ShortAndLong


def join_long(words) -> str:
    return '-'.join(words)


# Semantics ─────────────────────────────────────────────────────────────────────────────────────

class Occurrence(Enum):
    SINGLE = 'single'
    MULTI = 'multi'
    REQUIRED_ONE = 'required-one'

class ValueKind(Enum):
    NONE = 'none'
    REQUIRED = 'required'
    OPTIONAL = 'optional'


# Pairs with no native registry primitive, synthesized by `flagspec.extension`.
EXTENSION_PAIRS = frozenset({
    (Occurrence.MULTI, ValueKind.OPTIONAL),
    (Occurrence.REQUIRED_ONE, ValueKind.OPTIONAL),
})


@dataclass(frozen=True)
class OptionSpec:
    name: OptionName
    occurrence: Occurrence = Occurrence.SINGLE
    value: ValueKind = ValueKind.NONE
    hint: str | None = None
    description: str = ""
    meta: dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        assert (self.hint is None) == (self.value is ValueKind.NONE), "Hint must accompany a value."

    @property
    def short(self) -> str: return self.name.short

    @property
    def long(self) -> str: return self.name.long

    @property
    def requires_extension(self) -> bool:
        return (self.occurrence, self.value) in EXTENSION_PAIRS


@dataclass(frozen=True)
class Directive:
    expression: str
    meta: dict = field(default_factory=dict, compare=False)
