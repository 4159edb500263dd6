## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import ast
from functools import lru_cache

import lark
from .types import Token, OptionClause, DirectiveClause
from .errors import StructuralError


GRAMMAR = r"""start: clause? (SEPARATOR clause?)*
?clause: directive | option
directive: DOT EXPRESSION
option: _unit+
_unit: LONG | SHORT | COMMA | STAR | PLUS | MAYBE_EQUALS | EQUALS | WORD | STRING | OTHER

// COMMENTS
COMMENT.11: /#[^\r\n]*/

// TOKENS
SEPARATOR.1: ";"
DOT.1: "."
EXPRESSION: /[^\s;"'](?:[^;"']|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')*/
LONG.2: "--"
SHORT.1: "-"
COMMA.1: ","
STAR.1: "*"
PLUS.1: "+"
MAYBE_EQUALS.2: "?="
EQUALS.1: "="
WORD.1: /[A-Za-z0-9_]+/
STRING.1: /"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'/
OTHER: /[^\s;]/

// WHITESPACE
%import common.WS
%ignore WS
%ignore COMMENT
"""


@lru_cache(maxsize=1)
def _get_parser() -> lark.Lark:
    return lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="contextual", propagate_positions=True)


def decode_string(token: Token) -> str:
    assert token.type == 'STRING'
    return ast.literal_eval(token.value)


def _as_token(tok: lark.Token) -> Token:
    return Token(tok.type, tok.value, tok.line, tok.column, tok.start_pos, tok.end_pos)


def tokenize(source: str, filename=None) -> list[OptionClause | DirectiveClause]:
    """Split specification text into `;`-separated clauses of flat tokens."""
    try:
        tree = _get_parser().parse(source)
    except lark.exceptions.UnexpectedInput as exc:
        def attr(k): return getattr(exc, k, None)
        token_val = getattr(token, 'value', '') if (token := attr('token')) is not None else ''
        if token_val == '$END': token_val = ''
        raise StructuralError(f"Clause could not be split: {str(exc).strip()}",
                              filename=filename, line=attr('line'), column=attr('column'), token=token_val) from None

    clauses = []
    for node in tree.children:
        if not isinstance(node, lark.Tree): continue   # SEPARATOR
        index = len(clauses)

        if node.data == 'directive':
            dot, expression = node.children
            meta = {'filename': filename, 'line': dot.line, 'column': dot.column,
                    'text': source[dot.start_pos:expression.end_pos].strip()}
            clauses.append(DirectiveClause(expression.value.strip(), index, meta))
            continue

        assert node.data == 'option'
        tokens = tuple(_as_token(t) for t in node.children)
        first, last = tokens[0], tokens[-1]
        meta = {'filename': filename, 'line': first.line, 'column': first.column,
                'text': source[first.start:last.end]}

        if len(tokens) < 2:
            raise StructuralError(f"Clause `{meta['text']}` needs both an option name and a description.",
                                  filename=filename, line=first.line, column=first.column, token=first.value,
                                  clause=index, meta=meta)
        if last.type != 'STRING':
            raise StructuralError(f"Clause `{meta['text']}` must end with a quoted description.",
                                  filename=filename, line=last.line, column=last.column, token=last.value,
                                  clause=index, meta=meta)
        clauses.append(OptionClause(tokens, index, meta))
    return clauses


def format_parse_error_context(filename, line, column, token_value, source=None):
    if source is None:
        if filename is None or not os.path.isfile(filename): return ""
        source = open(filename, 'r', encoding='utf-8').read()
    lines = source.splitlines(keepends=True)
    if line is None or not lines: return ""
    token_value = token_value or ""
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename or '<string>'}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column and 0 < column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+len(token_value)-1]}\033[0m" +
                    line_content[column+len(token_value)-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
