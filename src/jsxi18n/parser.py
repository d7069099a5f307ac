"""JSX parser: finds every JSX element in JavaScript source and builds an AST."""

from __future__ import annotations

from dataclasses import dataclass, field

from jsxi18n.ast import (
    Comment,
    Expression,
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
    Program,
    StringLiteral,
)
from jsxi18n.errors import ParseError
from jsxi18n.lexer import Lexer
from jsxi18n.tokens import Position, Span, Token, TokenType


@dataclass
class _Scan:
    """What one run of JavaScript (top level or inside braces) contained."""

    elements: list[JSXElement | JSXFragment] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    significant: int = 0
    first: Position | None = None  # start of the first non-whitespace item
    last: Position | None = None  # end of the last non-whitespace item
    lead: Token | None = None  # first significant token
    after_lead: Position | None = None  # start of the second significant item
    close: Token | None = None  # the } that ended the run

    def note(self, span: Span, significant: bool) -> None:
        if self.first is None:
            self.first = span.start
        self.last = span.end
        if significant:
            if self.significant == 1:
                self.after_lead = span.start
            self.significant += 1


class Parser:
    """Recursive descent parser for JSX embedded in JavaScript."""

    def __init__(self, source: str, filename: str = "input.jsx") -> None:
        self._source = source
        self._filename = filename
        self._lexer = Lexer(source, filename)
        self._lookahead: Token | None = None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _next_tag(self) -> Token:
        if self._lookahead is not None:
            tok, self._lookahead = self._lookahead, None
            return tok
        return self._lexer.jsx_tag_token()

    def _push_back(self, tok: Token) -> None:
        self._lookahead = tok

    def _expect_tag(self, tt: TokenType, message: str) -> Token:
        tok = self._next_tag()
        if tok.type != tt:
            raise self._error(message, tok.span)
        return tok

    def _error(self, message: str, span: Span) -> ParseError:
        return ParseError(message, span, self._source, self._filename)

    # ------------------------------------------------------------------
    # JavaScript
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        scan = self._parse_js(None)
        start = Position(1, 0, 0)
        return Program(tuple(scan.elements), Span(start, self._lexer.position()))

    def _parse_js(self, open_brace: Token | None) -> _Scan:
        """Scan JavaScript until EOF, or until the } matching *open_brace*."""
        scan = _Scan()
        depth = 0
        while True:
            tok = self._lexer.next_js()

            if tok.type == TokenType.EOF:
                if open_brace is not None:
                    raise self._error("unterminated expression container", open_brace.span)
                return scan

            if tok.type == TokenType.COMMENT:
                kind = "line" if tok.raw.startswith("//") else "block"
                scan.comments.append(Comment(kind, tok.value, tok.span))
                scan.note(tok.span, significant=False)
                continue

            if tok.type == TokenType.PUNCT and tok.value == "}":
                if depth == 0 and open_brace is not None:
                    scan.close = tok
                    return scan
                depth = max(0, depth - 1)
            elif tok.type == TokenType.PUNCT and tok.value == "{":
                depth += 1

            if scan.lead is None:
                scan.lead = tok

            if (
                tok.type == TokenType.PUNCT
                and tok.value == "<"
                and tok.expr_allowed
                and self._lexer.at_jsx_start()
            ):
                node = self._parse_element(tok)
                self._lexer.end_expression()
                scan.elements.append(node)
                scan.note(node.span, significant=True)
                continue

            scan.note(tok.span, significant=True)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _parse_element(self, lt: Token) -> JSXElement | JSXFragment:
        """Parse an element or fragment; *lt* is the already consumed ``<``."""
        start = lt.span.start
        tok = self._next_tag()

        if tok.type == TokenType.JSX_GT:
            children, end = self._parse_children(start, "")
            return JSXFragment(tuple(children), Span(start, end))

        name = self._parse_name(tok)
        attributes: list[JSXAttribute | JSXSpreadAttribute] = []

        tok = self._next_tag()
        while True:
            if tok.type == TokenType.JSX_NAME:
                attr = self._parse_attribute(tok)
                attributes.append(attr)
                tok = self._next_tag()
            elif tok.type == TokenType.LBRACE:
                attributes.append(self._parse_spread_attribute(tok))
                tok = self._next_tag()
            elif tok.type == TokenType.JSX_SLASH:
                gt = self._expect_tag(TokenType.JSX_GT, "expected '>' after '/' in self-closing tag")
                return JSXElement(name, tuple(attributes), (), True, Span(start, gt.span.end))
            elif tok.type == TokenType.JSX_GT:
                break
            elif tok.type == TokenType.EOF:
                raise self._error(f"unterminated JSX tag <{name}>", Span(start, tok.span.end))
            else:
                raise self._error(f"unexpected {tok.raw!r} in JSX tag <{name}>", tok.span)

        children, end = self._parse_children(start, name)
        return JSXElement(name, tuple(attributes), tuple(children), False, Span(start, end))

    def _parse_name(self, tok: Token) -> str:
        """Tag name: ``a``, ``a:b`` or ``a.b.c``."""
        if tok.type != TokenType.JSX_NAME:
            raise self._error("expected JSX tag name", tok.span)
        name = tok.value

        nxt = self._next_tag()
        if nxt.type == TokenType.JSX_COLON:
            local = self._expect_tag(TokenType.JSX_NAME, "expected name after ':'")
            return f"{name}:{local.value}"
        while nxt.type == TokenType.JSX_DOT:
            member = self._expect_tag(TokenType.JSX_NAME, "expected name after '.'")
            name = f"{name}.{member.value}"
            nxt = self._next_tag()
        self._push_back(nxt)
        return name

    def _parse_children(self, start: Position, name: str) -> tuple[list, Position]:
        """Parse children up to and including the closing tag; return them and its end."""
        children: list[JSXText | JSXExpressionContainer | JSXElement | JSXFragment] = []
        while True:
            tok = self._lexer.jsx_child_token()

            if tok.type == TokenType.EOF:
                label = f"<{name}>" if name else "fragment"
                raise self._error(f"unterminated JSX contents for {label}", Span(start, tok.span.end))

            if tok.type == TokenType.JSX_TEXT:
                children.append(JSXText(tok.value, tok.raw, tok.span))
            elif tok.type == TokenType.LBRACE:
                children.append(self._parse_container(tok))
            else:
                nxt = self._next_tag()
                if nxt.type == TokenType.JSX_SLASH:
                    return children, self._parse_closing_tag(name)
                self._push_back(nxt)
                children.append(self._parse_element(tok))

    def _parse_closing_tag(self, name: str) -> Position:
        tok = self._next_tag()
        if not name:
            if tok.type != TokenType.JSX_GT:
                raise self._error("expected corresponding closing tag for JSX fragment", tok.span)
            return tok.span.end

        if tok.type != TokenType.JSX_NAME:
            raise self._error(f"expected corresponding JSX closing tag for <{name}>", tok.span)
        closing = self._parse_name(tok)
        if closing != name:
            raise self._error(f"expected corresponding JSX closing tag for <{name}>", tok.span)
        gt = self._expect_tag(TokenType.JSX_GT, f"expected '>' to close </{name}")
        return gt.span.end

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _parse_attribute(self, name_tok: Token) -> JSXAttribute:
        name = name_tok.value
        name_span = name_tok.span

        tok = self._next_tag()
        if tok.type == TokenType.JSX_COLON:
            local = self._expect_tag(TokenType.JSX_NAME, "expected name after ':'")
            name = f"{name}:{local.value}"
            name_span = Span(name_span.start, local.span.end)
            tok = self._next_tag()

        if tok.type != TokenType.JSX_EQ:
            self._push_back(tok)
            return JSXAttribute(name, None, name_span, name_span)

        tok = self._next_tag()
        value: StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment
        if tok.type == TokenType.JSX_STRING:
            value = StringLiteral(tok.value, tok.span)
        elif tok.type == TokenType.LBRACE:
            value = self._parse_container(tok)
            if isinstance(value.expression, JSXEmptyExpression):
                raise self._error(
                    "JSX attributes must only be assigned a non-empty expression", value.span
                )
        elif tok.type == TokenType.JSX_LT:
            value = self._parse_element(tok)
        else:
            raise self._error(
                "JSX attribute value must be a string, an expression container or an element",
                tok.span,
            )
        return JSXAttribute(name, value, name_span, Span(name_span.start, value.span.end))

    def _parse_spread_attribute(self, lbrace: Token) -> JSXSpreadAttribute:
        self._lexer.begin_expression()
        scan = self._parse_js(lbrace)
        close = scan.close
        lead = scan.lead
        if lead is None or lead.value != "..." or scan.after_lead is None or scan.last is None:
            raise self._error("expected '...' in JSX spread attribute", Span(lbrace.span.start, close.span.end))
        argument = Expression(
            self._source[scan.after_lead.offset : scan.last.offset],
            tuple(scan.elements),
            Span(scan.after_lead, scan.last),
        )
        return JSXSpreadAttribute(argument, Span(lbrace.span.start, close.span.end))

    # ------------------------------------------------------------------
    # Expression containers
    # ------------------------------------------------------------------

    def _parse_container(self, lbrace: Token) -> JSXExpressionContainer:
        self._lexer.begin_expression()
        scan = self._parse_js(lbrace)
        close = scan.close
        span = Span(lbrace.span.start, close.span.end)

        if scan.significant == 0:
            empty = JSXEmptyExpression(tuple(scan.comments), Span(lbrace.span.end, close.span.start))
            return JSXExpressionContainer(empty, span)

        expr = Expression(
            self._source[scan.first.offset : scan.last.offset],
            tuple(scan.elements),
            Span(scan.first, scan.last),
        )
        return JSXExpressionContainer(expr, span)


def parse(source: str, filename: str = "input.jsx") -> Program:
    """Convenience function: parse source text and return a Program."""
    return Parser(source, filename).parse()
