"""Token types, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # JavaScript mode
    IDENTIFIER = auto()  # identifiers and keywords
    PUNCT = auto()  # operators and punctuation
    STRING = auto()  # '...' or "..."
    TEMPLATE = auto()  # template literal chunk (`...` or `...${ / }...` pieces)
    NUMBER = auto()
    REGEX = auto()
    COMMENT = auto()  # // or /* */, value is the comment body

    # JSX tag mode
    JSX_LT = auto()  # <
    JSX_GT = auto()  # >
    JSX_SLASH = auto()  # /
    JSX_EQ = auto()  # =
    JSX_COLON = auto()  # :
    JSX_DOT = auto()  # .
    JSX_NAME = auto()  # identifier, may contain '-'
    JSX_STRING = auto()  # attribute string, entities decoded
    LBRACE = auto()  # { opening an expression container

    # JSX children mode
    JSX_TEXT = auto()  # text between tags, entities decoded

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position: 1-based line, 0-based column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with resolved value and original source text.

    ``expr_allowed`` records whether an expression could start at this
    token, which decides whether ``<`` opens JSX.
    """

    type: TokenType
    value: str
    raw: str
    span: Span
    expr_allowed: bool = False


# Keywords after which an expression (and therefore JSX or a regex) may start
EXPR_KEYWORDS = frozenset(
    {
        "await",
        "case",
        "default",
        "delete",
        "do",
        "else",
        "export",
        "extends",
        "in",
        "instanceof",
        "new",
        "of",
        "return",
        "throw",
        "typeof",
        "void",
        "yield",
    }
)

# Keywords whose parenthesized head is followed by a statement, not an operator
STATEMENT_HEADS = frozenset({"if", "for", "while", "with"})

# Longest first, so the lexer can take the first match
PUNCTUATORS = (
    ">>>=",
    "...",
    "===",
    "!==",
    "**=",
    "<<=",
    ">>=",
    ">>>",
    "&&=",
    "||=",
    "??=",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "??",
    "?.",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "**",
    "<<",
    ">>",
    "{",
    "}",
    "(",
    ")",
    "[",
    "]",
    ";",
    ",",
    "<",
    ">",
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "!",
    "~",
    "?",
    ":",
    "=",
    ".",
    "@",
    "#",
)

# Punctuators after which an operator (not an expression) is expected
_CLOSERS = frozenset({")", "]", "++", "--"})


def allows_expression(tok: Token) -> bool:
    """Return True if an expression may start right after *tok*.

    A closing brace is treated as the end of a block, so ``/`` after it
    starts a regex and ``<`` starts JSX.
    """
    if tok.type == TokenType.PUNCT:
        return tok.value not in _CLOSERS
    if tok.type == TokenType.IDENTIFIER:
        return tok.value in EXPR_KEYWORDS
    if tok.type == TokenType.TEMPLATE:
        return tok.raw.endswith("${")
    return False


def is_ident_start(ch: str) -> bool:
    """Return True if ch can start a JavaScript identifier."""
    return ch.isalpha() or ch in "$_"


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue a JavaScript identifier."""
    return ch.isalnum() or ch in "$_\u200c\u200d"


def is_jsx_name_char(ch: str) -> bool:
    """Return True if ch can continue a JSX tag or attribute name."""
    return is_ident_char(ch) or ch == "-"


def is_identifier(name: str) -> bool:
    """Return True if name is a plain JavaScript identifier."""
    if not name or not is_ident_start(name[0]):
        return False
    return all(is_ident_char(ch) for ch in name[1:])
