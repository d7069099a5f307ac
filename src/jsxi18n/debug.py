"""--debug JSX tree dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from jsxi18n.ast import (
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


def dump_ast(program: Program, *, file: TextIO | None = None) -> None:
    """Print a human-readable JSX tree to *file* (stderr by default)."""
    if file is None:
        file = sys.stderr
    file.write("Program\n")
    for node in program.body:
        _dump_node(node, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _where(node: JSXElement | JSXFragment | JSXText | JSXExpressionContainer) -> str:
    return f"@{node.span.start.line}:{node.span.start.column}"


def _dump_node(node: JSXElement | JSXFragment, depth: int, f: TextIO) -> None:
    if isinstance(node, JSXFragment):
        f.write(f"{_indent(depth)}JSXFragment {_where(node)}\n")
    else:
        closing = " />" if node.self_closing else ""
        f.write(f"{_indent(depth)}JSXElement <{node.name}>{closing} {_where(node)}\n")
        for attr in node.attributes:
            _dump_attr(attr, depth + 1, f)
    for child in node.children:
        _dump_child(child, depth + 1, f)


def _dump_attr(attr: JSXAttribute | JSXSpreadAttribute, depth: int, f: TextIO) -> None:
    if isinstance(attr, JSXSpreadAttribute):
        f.write(f"{_indent(depth)}Spread {{...{attr.argument.source}}}\n")
        _dump_expression(attr.argument, depth + 1, f)
        return

    value = attr.value
    if value is None:
        f.write(f"{_indent(depth)}Attr {attr.name}\n")
    elif isinstance(value, StringLiteral):
        f.write(f"{_indent(depth)}Attr {attr.name}={value.value!r}\n")
    elif isinstance(value, JSXExpressionContainer):
        f.write(f"{_indent(depth)}Attr {attr.name}={{...}}\n")
        if isinstance(value.expression, Expression):
            _dump_expression(value.expression, depth + 1, f)
    else:
        f.write(f"{_indent(depth)}Attr {attr.name}=\n")
        _dump_node(value, depth + 1, f)


def _dump_child(child: JSXText | JSXExpressionContainer | JSXElement | JSXFragment, depth: int, f: TextIO) -> None:
    if isinstance(child, JSXText):
        f.write(f"{_indent(depth)}JSXText({child.value!r}) {_where(child)}\n")
    elif isinstance(child, JSXExpressionContainer):
        expr = child.expression
        if isinstance(expr, JSXEmptyExpression):
            comments = ", ".join(repr(c.value) for c in expr.comments)
            f.write(f"{_indent(depth)}JSXEmptyExpression[{comments}] {_where(child)}\n")
        else:
            _dump_expression(expr, depth, f)
    else:
        _dump_node(child, depth, f)


def _dump_expression(expr: Expression, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Expression({expr.source!r})\n")
    for node in expr.elements:
        _dump_node(node, depth + 1, f)
