"""Native host: rewrite i18n tags in parsed JSX source and splice the result back.

Everything outside the replaced elements is copied from the source
unchanged, so the output differs from the input only where a tag was
lowered.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field

from jsxi18n.ast import (
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    Comment,
    Expression,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXSpreadAttribute,
    JSXText,
    Node,
    NullLiteral,
    ObjectExpression,
    Program,
    Property,
    SpreadElement,
    StringLiteral,
)
from jsxi18n.diagnostics import Reporter
from jsxi18n.render import render_expression
from jsxi18n.rewrite import ChildKind, TagRewriter
from jsxi18n.tokens import Span


class NativeAdapter:
    """`HostAdapter` over `jsxi18n.ast` nodes."""

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def element_name(self, node: object) -> str | None:
        if isinstance(node, JSXElement):
            return node.name
        return None

    def element_span(self, node: JSXElement) -> Span:
        return node.span

    def node_span(self, node: object) -> Span | None:
        return getattr(node, "span", None)

    def attributes(self, node: JSXElement) -> Sequence[JSXAttribute | JSXSpreadAttribute]:
        return node.attributes

    def attribute(self, attr: JSXAttribute | JSXSpreadAttribute) -> tuple[str | None, Node]:
        if isinstance(attr, JSXSpreadAttribute):
            return None, attr.argument
        value = attr.value
        if value is None:
            return attr.name, BooleanLiteral(True, attr.name_span)
        if isinstance(value, JSXExpressionContainer):
            return attr.name, value.expression
        return attr.name, value

    def children(self, node: JSXElement) -> Sequence[object]:
        return node.children

    def classify(self, child: object) -> ChildKind:
        if isinstance(child, JSXText):
            return ChildKind.TEXT
        if isinstance(child, JSXExpressionContainer):
            if isinstance(child.expression, JSXEmptyExpression):
                return ChildKind.EMPTY_EXPRESSION
            return ChildKind.EXPRESSION
        return ChildKind.OTHER

    def text_value(self, child: JSXText) -> str:
        return child.value

    def comments(self, child: JSXExpressionContainer) -> Sequence[Comment]:
        return child.expression.comments

    def expression(self, child: JSXExpressionContainer) -> Expression:
        return child.expression

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def make_null(self) -> NullLiteral:
        return NullLiteral()

    def make_string(self, value: str, span: Span | None) -> StringLiteral:
        return StringLiteral(value, span)

    def make_object_property(self, key: str, value: Node) -> Property:
        return Property(key, value, value.span)

    def make_spread_property(self, argument: Expression) -> SpreadElement:
        return SpreadElement(argument, argument.span)

    def make_object(self, properties: list[Property | SpreadElement], span: Span | None) -> ObjectExpression:
        return ObjectExpression(tuple(properties), span)

    def make_binary(self, operator: str, left: Node, right: Node, span: Span | None) -> BinaryExpression:
        return BinaryExpression(operator, left, right, span)

    def make_call(self, callee: str, arguments: list[Node], span: Span | None) -> CallExpression:
        return CallExpression(Identifier(callee, span), tuple(arguments), span)

    def attach_trailing_comments(self, node: Node, comments: Sequence[Comment]) -> Node:
        return dataclasses.replace(node, trailing_comments=node.trailing_comments + tuple(comments))


# ---------------------------------------------------------------------------
# Traversal and splicing
# ---------------------------------------------------------------------------


@dataclass
class _Edit:
    start: int
    end: int
    text: str


@dataclass
class TransformContext:
    """State carried through one source transformation."""

    source: str
    rewriter: TagRewriter
    retain_lines: bool = True
    edits: list[_Edit] = field(default_factory=list)


def transform_program(
    program: Program,
    source: str,
    reporter: Reporter,
    *,
    retain_lines: bool = True,
) -> str:
    """Lower every i18n tag in *program* and return the new source text."""
    ctx = TransformContext(source, TagRewriter(NativeAdapter(), reporter), retain_lines)
    for node in program.body:
        _visit(node, ctx, braced=False)
    return _splice(source, ctx.edits)


def _visit(node: JSXElement | JSXFragment, ctx: TransformContext, braced: bool) -> None:
    """Pre-order: try the node itself, descend only if it was left alone.

    *braced* is set where the node is a JSX child or attribute value, where
    a call has to be wrapped in ``{...}``.
    """
    replacement = ctx.rewriter.rewrite(node)
    if replacement is not None:
        text = render_expression(replacement, ctx.source, retain_lines=ctx.retain_lines)
        if braced:
            text = "{" + text + "}"
        ctx.edits.append(_Edit(node.span.start.offset, node.span.end.offset, text))
        return

    if isinstance(node, JSXElement):
        for attr in node.attributes:
            if isinstance(attr, JSXSpreadAttribute):
                _visit_expression(attr.argument, ctx)
            elif isinstance(attr.value, JSXExpressionContainer):
                _visit_container(attr.value, ctx)
            elif isinstance(attr.value, (JSXElement, JSXFragment)):
                _visit(attr.value, ctx, braced=True)

    for child in node.children:
        if isinstance(child, JSXExpressionContainer):
            _visit_container(child, ctx)
        elif isinstance(child, (JSXElement, JSXFragment)):
            _visit(child, ctx, braced=True)


def _visit_container(container: JSXExpressionContainer, ctx: TransformContext) -> None:
    if isinstance(container.expression, Expression):
        _visit_expression(container.expression, ctx)


def _visit_expression(expr: Expression, ctx: TransformContext) -> None:
    for node in expr.elements:
        _visit(node, ctx, braced=False)


def _splice(source: str, edits: list[_Edit]) -> str:
    parts: list[str] = []
    pos = 0
    for edit in sorted(edits, key=lambda e: e.start):
        parts.append(source[pos : edit.start])
        parts.append(edit.text)
        pos = edit.end
    parts.append(source[pos:])
    return "".join(parts)
