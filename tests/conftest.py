"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from jsxi18n.ast import CallExpression, JSXElement, Program
from jsxi18n.diagnostics import DiagnosticCollector, Reporter
from jsxi18n.lexer import tokenize
from jsxi18n.native import NativeAdapter
from jsxi18n.parser import parse
from jsxi18n.rewrite import TagRewriter
from jsxi18n.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes JavaScript and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        return [t for t in tokenize(source) if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Program."""

    def _parse(source: str, filename: str = "test.jsx") -> Program:
        return parse(source, filename)

    return _parse


@pytest.fixture
def collector() -> DiagnosticCollector:
    return DiagnosticCollector()


@pytest.fixture
def lower(collector):
    """Return a helper that rewrites the first top-level element of source.

    Warnings land in the ``collector`` fixture.
    """

    def _lower(source: str) -> CallExpression | None:
        program = parse(source, "test.jsx")
        rewriter = TagRewriter(NativeAdapter(), Reporter(collector, "test.jsx"))
        return rewriter.rewrite(program.body[0])

    return _lower


def first_element(program: Program) -> JSXElement:
    """Return the first top-level node, asserting it is an element."""
    node = program.body[0]
    assert isinstance(node, JSXElement), f"Expected JSXElement, got {type(node).__name__}"
    return node


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
