"""AST node types for parsed JSX and for the calls it is rewritten into.

Only JSX is parsed into nodes; the JavaScript around it stays source text
and is represented by `Expression` where it matters (inside `{...}`).
"""

from __future__ import annotations

from dataclasses import dataclass

from jsxi18n.tokens import Span


@dataclass(frozen=True, slots=True)
class Comment:
    """A source comment; kind is "block" or "line"."""

    kind: str
    value: str
    span: Span | None = None


# ---------------------------------------------------------------------------
# JSX
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class JSXText:
    """Text between tags. ``value`` has HTML entities decoded."""

    value: str
    raw: str
    span: Span


@dataclass(frozen=True, slots=True)
class JSXEmptyExpression:
    """The inside of ``{}`` or ``{/* comment */}``."""

    comments: tuple[Comment, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class Expression:
    """An opaque JavaScript expression, kept as source text.

    ``elements`` lists the JSX elements found inside it, outermost first,
    so traversal can reach them.
    """

    source: str
    elements: tuple[JSXElement | JSXFragment, ...]
    span: Span
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class JSXExpressionContainer:
    """``{expression}`` as a child or attribute value."""

    expression: Expression | JSXEmptyExpression
    span: Span


@dataclass(frozen=True, slots=True)
class StringLiteral:
    value: str
    span: Span | None = None
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class JSXAttribute:
    """name=value; value is None for a bare attribute like ``<x disabled>``."""

    name: str
    value: StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment | None
    name_span: Span
    span: Span


@dataclass(frozen=True, slots=True)
class JSXSpreadAttribute:
    """``{...props}`` in an opening tag."""

    argument: Expression
    span: Span


@dataclass(frozen=True, slots=True)
class JSXElement:
    name: str
    attributes: tuple[JSXAttribute | JSXSpreadAttribute, ...]
    children: tuple[JSXText | JSXExpressionContainer | JSXElement | JSXFragment, ...]
    self_closing: bool
    span: Span
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class JSXFragment:
    """``<>...</>``."""

    children: tuple[JSXText | JSXExpressionContainer | JSXElement | JSXFragment, ...]
    span: Span
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class Program:
    """Root node: the top-level JSX elements of a source file."""

    body: tuple[JSXElement | JSXFragment, ...]
    span: Span


# ---------------------------------------------------------------------------
# Rewrite output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NullLiteral:
    span: Span | None = None
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """Value of a bare attribute such as ``<$_ plural>``."""

    value: bool
    span: Span | None = None
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Property:
    """``key: value`` in an object literal."""

    key: str
    value: Node
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class SpreadElement:
    """``...argument`` in an object literal."""

    argument: Expression
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ObjectExpression:
    properties: tuple[Property | SpreadElement, ...]
    span: Span | None = None
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class BinaryExpression:
    operator: str
    left: Node
    right: Node
    span: Span | None = None
    trailing_comments: tuple[Comment, ...] = ()


@dataclass(frozen=True, slots=True)
class CallExpression:
    callee: Identifier
    arguments: tuple[Node, ...]
    span: Span | None = None
    trailing_comments: tuple[Comment, ...] = ()


Node = (
    NullLiteral
    | BooleanLiteral
    | StringLiteral
    | Identifier
    | ObjectExpression
    | BinaryExpression
    | CallExpression
    | Expression
    | JSXElement
    | JSXFragment
)
