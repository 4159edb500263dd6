## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class FlagSpecError(Exception):
    def __init__(self, message: str = "", *, clause=None, meta=None):
        """Base class for all errors raised while compiling an option specification."""
        super().__init__(message)
        self.clause: int = clause
        self.meta: dict = meta or {}

class FlagSpecParseError(FlagSpecError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None, clause=None, meta=None):
        super().__init__(message, clause=clause, meta=meta)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class StructuralError(FlagSpecParseError, lark.exceptions.ParseError):
    """Clause is missing its option name or its description."""
    pass

class MalformedOptionName(FlagSpecParseError):
    pass

class MalformedModifier(FlagSpecParseError):
    pass

class DuplicateOptionName(FlagSpecParseError):
    """Two clauses declare the same short or long name; only raised in strict mode."""
    pass


class OptionRejected(FlagSpecError, ValueError):
    """The registry refused a registration or directive."""
    pass

class SpecNotFound(FlagSpecError, FileNotFoundError):
    def __init__(self, message, *, name=None, candidates=()):
        super().__init__(message)
        self.name = name
        self.candidates = list(candidates)
