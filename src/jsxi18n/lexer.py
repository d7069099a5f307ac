"""JSX-aware lexer: hands out JavaScript, JSX tag or JSX child tokens on demand.

JSX cannot be tokenized without knowing where the parser is, so the parser
picks the mode for each token: `next_js`, `jsx_tag_token` or
`jsx_child_token`.
"""

from __future__ import annotations

import re
from html.entities import html5

from jsxi18n.errors import LexError
from jsxi18n.tokens import (
    PUNCTUATORS,
    STATEMENT_HEADS,
    Position,
    Span,
    Token,
    TokenType,
    allows_expression,
    is_ident_char,
    is_ident_start,
    is_jsx_name_char,
)

_SIMPLE_TAG_TOKENS = {
    "<": TokenType.JSX_LT,
    ">": TokenType.JSX_GT,
    "/": TokenType.JSX_SLASH,
    "=": TokenType.JSX_EQ,
    ":": TokenType.JSX_COLON,
    ".": TokenType.JSX_DOT,
}


class Lexer:
    """Tokenize JavaScript with embedded JSX."""

    def __init__(self, source: str, filename: str = "input.jsx") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 0
        self._expr_allowed = True
        self._brace_depth = 0
        self._template_stack: list[int] = []  # brace depth at each open ${
        self._paren_stack: list[bool] = []  # True for an if/for/while/with head
        self._last_ident = ""  # identifier just lexed, unless it followed "."
        self._after_dot = False

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def position(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 0
        else:
            self._col += 1
        return ch

    def _make(
        self, tt: TokenType, value: str, start: Position, expr_allowed: bool = False
    ) -> Token:
        raw = self._source[start.offset : self._pos]
        return Token(tt, value, raw, Span(start, self.position()), expr_allowed)

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self.position()
        return LexError(message, pos, self._source, self._filename)

    def _skip_ws(self) -> None:
        while not self._at_end() and self._peek().isspace():
            self._advance()

    # ------------------------------------------------------------------
    # Parser hooks
    # ------------------------------------------------------------------

    def begin_expression(self) -> None:
        """An expression starts next (after ``{`` in JSX)."""
        self._expr_allowed = True

    def end_expression(self) -> None:
        """An expression just ended (after a JSX element in JavaScript)."""
        self._expr_allowed = False

    def at_jsx_start(self) -> bool:
        """After a ``<`` token: does a tag name or fragment ``>`` follow?"""
        idx = self._pos
        while idx < len(self._source) and self._source[idx].isspace():
            idx += 1
        if idx >= len(self._source):
            return False
        ch = self._source[idx]
        return ch == ">" or is_ident_start(ch)

    # ------------------------------------------------------------------
    # JavaScript mode
    # ------------------------------------------------------------------

    def next_js(self) -> Token:
        """Return the next JavaScript token (comments included)."""
        self._skip_ws()
        start = self.position()
        allowed = self._expr_allowed

        if self._at_end():
            return self._make(TokenType.EOF, "", start, allowed)

        ch = self._peek()
        nxt = self._peek(1)

        # Comments leave the expression state alone
        if ch == "/" and nxt == "/":
            return self._lex_line_comment(start)
        if ch == "/" and nxt == "*":
            return self._lex_block_comment(start)

        if ch in "'\"":
            tok = self._lex_string(start, allowed)
        elif ch == "`":
            self._advance()
            tok = self._lex_template(start, allowed)
        elif ch == "}" and self._template_stack and self._template_stack[-1] == self._brace_depth:
            self._template_stack.pop()
            self._advance()
            tok = self._lex_template(start, allowed)
        elif ch.isdigit() or (ch == "." and nxt.isdigit()):
            tok = self._lex_number(start, allowed)
        elif is_ident_start(ch) or ch == "\\":
            tok = self._lex_identifier(start, allowed)
        elif ch == "/" and allowed:
            tok = self._lex_regex(start, allowed)
        else:
            tok = self._lex_punct(start, allowed)

        self._expr_allowed = allows_expression(tok)
        if tok.type == TokenType.PUNCT and tok.value == "(":
            self._paren_stack.append(self._last_ident in STATEMENT_HEADS)
        elif tok.type == TokenType.PUNCT and tok.value == ")" and self._paren_stack:
            if self._paren_stack.pop():
                self._expr_allowed = True
        if tok.type == TokenType.IDENTIFIER and not self._after_dot:
            self._last_ident = tok.value
        else:
            self._last_ident = ""
        self._after_dot = tok.type == TokenType.PUNCT and tok.value == "."
        return tok

    def _lex_line_comment(self, start: Position) -> Token:
        self._advance()
        self._advance()
        body_start = self._pos
        while not self._at_end() and self._peek() not in "\r\n":
            self._advance()
        return self._make(TokenType.COMMENT, self._source[body_start : self._pos], start)

    def _lex_block_comment(self, start: Position) -> Token:
        self._advance()
        self._advance()
        body_start = self._pos
        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                body = self._source[body_start : self._pos]
                self._advance()
                self._advance()
                return self._make(TokenType.COMMENT, body, start)
            self._advance()
        raise self._error("unterminated comment", start)

    def _lex_string(self, start: Position, allowed: bool) -> Token:
        quote = self._advance()
        while True:
            if self._at_end() or self._peek() == "\n":
                raise self._error("unterminated string literal", start)
            ch = self._advance()
            if ch == "\\":
                if self._at_end():
                    raise self._error("unterminated string literal", start)
                self._advance()
            elif ch == quote:
                break
        value = self._source[start.offset + 1 : self._pos - 1]
        return self._make(TokenType.STRING, value, start, allowed)

    def _lex_template(self, start: Position, allowed: bool) -> Token:
        """Scan a template chunk; the opening ` or } is already consumed."""
        while True:
            if self._at_end():
                raise self._error("unterminated template literal", start)
            ch = self._advance()
            if ch == "\\":
                if not self._at_end():
                    self._advance()
            elif ch == "`":
                break
            elif ch == "$" and self._peek() == "{":
                self._advance()
                self._template_stack.append(self._brace_depth)
                break
        return self._make(TokenType.TEMPLATE, "", start, allowed)

    def _lex_number(self, start: Position, allowed: bool) -> Token:
        while not self._at_end():
            ch = self._peek()
            if is_ident_char(ch) or ch == ".":
                self._advance()
            elif ch in "+-" and self._source[self._pos - 1] in "eE" and not self._is_hex(start):
                self._advance()
            else:
                break
        return self._make(TokenType.NUMBER, self._source[start.offset : self._pos], start, allowed)

    def _is_hex(self, start: Position) -> bool:
        return self._source[start.offset : start.offset + 2] in ("0x", "0X")

    def _lex_identifier(self, start: Position, allowed: bool) -> Token:
        while not self._at_end():
            ch = self._peek()
            if ch == "\\":
                # \uXXXX escape inside an identifier
                self._advance()
                if not self._at_end():
                    self._advance()
            elif is_ident_char(ch):
                self._advance()
            else:
                break
        return self._make(TokenType.IDENTIFIER, self._source[start.offset : self._pos], start, allowed)

    def _lex_regex(self, start: Position, allowed: bool) -> Token:
        self._advance()  # opening /
        in_class = False
        while True:
            if self._at_end() or self._peek() == "\n":
                raise self._error("unterminated regular expression", start)
            ch = self._advance()
            if ch == "\\":
                if self._at_end() or self._peek() == "\n":
                    raise self._error("unterminated regular expression", start)
                self._advance()
            elif ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                break
        while not self._at_end() and is_ident_char(self._peek()):
            self._advance()
        return self._make(TokenType.REGEX, self._source[start.offset : self._pos], start, allowed)

    def _lex_punct(self, start: Position, allowed: bool) -> Token:
        for punct in PUNCTUATORS:
            if self._source.startswith(punct, self._pos):
                for _ in punct:
                    self._advance()
                if punct == "{":
                    self._brace_depth += 1
                elif punct == "}":
                    self._brace_depth -= 1
                return self._make(TokenType.PUNCT, punct, start, allowed)
        ch = self._advance()
        if ch == "\0":
            raise self._error("NUL character in source", start)
        # Anything unknown is passed through as a one-character token
        return self._make(TokenType.PUNCT, ch, start, allowed)

    # ------------------------------------------------------------------
    # JSX tag mode
    # ------------------------------------------------------------------

    def jsx_tag_token(self) -> Token:
        """Return the next token inside ``<...>``, skipping whitespace and comments."""
        while True:
            self._skip_ws()
            if self._peek() == "/" and self._peek(1) == "/":
                self._lex_line_comment(self.position())
            elif self._peek() == "/" and self._peek(1) == "*":
                self._lex_block_comment(self.position())
            else:
                break

        start = self.position()
        if self._at_end():
            return self._make(TokenType.EOF, "", start)

        ch = self._peek()
        if ch in _SIMPLE_TAG_TOKENS:
            self._advance()
            return self._make(_SIMPLE_TAG_TOKENS[ch], ch, start)

        if ch == "{":
            self._advance()
            self._brace_depth += 1
            return self._make(TokenType.LBRACE, "{", start)

        if ch in "'\"":
            return self._lex_jsx_string(start)

        if is_ident_start(ch):
            while not self._at_end() and is_jsx_name_char(self._peek()):
                self._advance()
            return self._make(TokenType.JSX_NAME, self._source[start.offset : self._pos], start)

        raise self._error(f"unexpected character {ch!r} in JSX tag", start)

    def _lex_jsx_string(self, start: Position) -> Token:
        """Attribute strings have no escapes, may span lines, and decode entities."""
        quote = self._advance()
        while True:
            if self._at_end():
                raise self._error("unterminated string in JSX attribute", start)
            if self._advance() == quote:
                break
        value = decode_entities(self._source[start.offset + 1 : self._pos - 1])
        return self._make(TokenType.JSX_STRING, value, start)

    # ------------------------------------------------------------------
    # JSX children mode
    # ------------------------------------------------------------------

    def jsx_child_token(self) -> Token:
        """Return text, ``<`` or ``{`` between an element's tags."""
        start = self.position()
        if self._at_end():
            return self._make(TokenType.EOF, "", start)

        ch = self._peek()
        if ch == "<":
            self._advance()
            return self._make(TokenType.JSX_LT, "<", start)
        if ch == "{":
            self._advance()
            self._brace_depth += 1
            return self._make(TokenType.LBRACE, "{", start)

        while not self._at_end() and self._peek() not in "<{":
            self._advance()
        return self._make(TokenType.JSX_TEXT, decode_entities(self._source[start.offset : self._pos]), start)


_ENTITY_RE = re.compile(r"&(#[0-9]+|#x[0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def decode_entities(text: str) -> str:
    """Decode complete `&name;`, `&#N;` and `&#xN;` references.

    Anything else, including a reference without its semicolon, stays as written.
    """
    return _ENTITY_RE.sub(_decode_entity, text)


def _decode_entity(match: re.Match[str]) -> str:
    ref = match.group(1)
    if ref.startswith("#x"):
        code = int(ref[2:], 16)
    elif ref.startswith("#"):
        code = int(ref[1:])
    else:
        return html5.get(ref + ";", match.group(0))
    if code > 0x10FFFF:
        return match.group(0)
    return chr(code)


def tokenize(source: str, filename: str = "input.jsx") -> list[Token]:
    """Convenience function: JavaScript tokens of source (no JSX handling)."""
    lexer = Lexer(source, filename)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_js()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens
