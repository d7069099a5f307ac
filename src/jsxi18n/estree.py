"""ESTree host: rewrite i18n tags in JSON syntax trees produced by Babel.

Two node vocabularies are supported:

- ``babel``: Babel 6+ (``JSXText``, ``StringLiteral``, ``NullLiteral``,
  ``ObjectProperty``, ``CommentBlock``/``CommentLine``).
- ``estree``: Babel 5 and plain ESTree (``Literal``, ``Property`` with
  ``kind: "init"``, ``Block``/``Line``).

Either flavour reads either shape of text child; the flavour only decides
what gets built.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from jsxi18n.diagnostics import Reporter
from jsxi18n.rewrite import ChildKind, TagRewriter
from jsxi18n.strings import quote_string
from jsxi18n.tokens import Position, Span, is_identifier

FLAVORS = ("babel", "estree")

EstreeNode = dict[str, Any]


def span_of(node: Any) -> Span | None:
    """Span from an ESTree ``loc`` (plus ``start``/``end`` offsets if present)."""
    if not isinstance(node, dict):
        return None
    loc = node.get("loc")
    if not isinstance(loc, dict) or "start" not in loc or "end" not in loc:
        return None
    start = Position(loc["start"]["line"], loc["start"]["column"], node.get("start", 0))
    end = Position(loc["end"]["line"], loc["end"]["column"], node.get("end", 0))
    return Span(start, end)


def location_fields(span: Span | None) -> dict[str, Any]:
    """``loc``/``start``/``end`` keys for a new node, or nothing without a span."""
    if span is None:
        return {}
    return {
        "start": span.start.offset,
        "end": span.end.offset,
        "loc": {
            "start": {"line": span.start.line, "column": span.start.column},
            "end": {"line": span.end.line, "column": span.end.column},
        },
    }


class EstreeAdapter:
    """`HostAdapter` over ESTree dicts."""

    def __init__(self, flavor: str = "babel") -> None:
        if flavor not in FLAVORS:
            raise ValueError(f"unknown ESTree flavor {flavor!r} (expected one of {', '.join(FLAVORS)})")
        self.flavor = flavor

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def element_name(self, node: Any) -> str | None:
        if not isinstance(node, dict) or node.get("type") != "JSXElement":
            return None
        name = node.get("openingElement", {}).get("name", {})
        if name.get("type") == "JSXIdentifier":
            return name.get("name")
        return None

    def element_span(self, node: EstreeNode) -> Span | None:
        return span_of(node)

    def node_span(self, node: Any) -> Span | None:
        return span_of(node)

    def attributes(self, node: EstreeNode) -> Sequence[EstreeNode]:
        return node.get("openingElement", {}).get("attributes") or []

    def attribute(self, attr: EstreeNode) -> tuple[str | None, Any]:
        if attr.get("type") == "JSXSpreadAttribute":
            return None, attr["argument"]

        name = attr["name"]
        if name.get("type") == "JSXNamespacedName":
            key = f"{name['namespace']['name']}:{name['name']['name']}"
        else:
            key = name["name"]

        value = attr.get("value")
        if value is None:
            return key, self._make_boolean(True, span_of(name))
        if value.get("type") == "JSXExpressionContainer":
            return key, value["expression"]
        return key, value

    def children(self, node: EstreeNode) -> Sequence[Any]:
        return node.get("children") or []

    def classify(self, child: Any) -> ChildKind:
        kind = child.get("type") if isinstance(child, dict) else None
        if kind == "JSXText":
            return ChildKind.TEXT
        if kind == "Literal" and isinstance(child.get("value"), str):
            return ChildKind.TEXT
        if kind == "JSXExpressionContainer":
            if child.get("expression", {}).get("type") == "JSXEmptyExpression":
                return ChildKind.EMPTY_EXPRESSION
            return ChildKind.EXPRESSION
        return ChildKind.OTHER

    def text_value(self, child: EstreeNode) -> str:
        return child["value"]

    def comments(self, child: EstreeNode) -> Sequence[EstreeNode]:
        expr = child["expression"]
        return expr.get("innerComments") or expr.get("comments") or child.get("innerComments") or []

    def expression(self, child: EstreeNode) -> Any:
        return child["expression"]

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def make_null(self) -> EstreeNode:
        if self.flavor == "babel":
            return {"type": "NullLiteral"}
        return {"type": "Literal", "value": None, "raw": "null"}

    def _make_boolean(self, value: bool, span: Span | None) -> EstreeNode:
        if self.flavor == "babel":
            return {"type": "BooleanLiteral", "value": value, **location_fields(span)}
        raw = "true" if value else "false"
        return {"type": "Literal", "value": value, "raw": raw, **location_fields(span)}

    def make_string(self, value: str, span: Span | None) -> EstreeNode:
        raw = quote_string(value)
        if self.flavor == "babel":
            return {
                "type": "StringLiteral",
                "value": value,
                "extra": {"rawValue": value, "raw": raw},
                **location_fields(span),
            }
        return {"type": "Literal", "value": value, "raw": raw, **location_fields(span)}

    def _make_key(self, key: str) -> EstreeNode:
        if is_identifier(key):
            return {"type": "Identifier", "name": key}
        return self.make_string(key, None)

    def make_object_property(self, key: str, value: Any) -> EstreeNode:
        span = span_of(value)
        if self.flavor == "babel":
            return {
                "type": "ObjectProperty",
                "key": self._make_key(key),
                "value": value,
                "computed": False,
                "shorthand": False,
                **location_fields(span),
            }
        return {
            "type": "Property",
            "kind": "init",
            "key": self._make_key(key),
            "value": value,
            "computed": False,
            "method": False,
            "shorthand": False,
            **location_fields(span),
        }

    def make_spread_property(self, argument: Any) -> EstreeNode:
        return {"type": "SpreadElement", "argument": argument, **location_fields(span_of(argument))}

    def make_object(self, properties: list[EstreeNode], span: Span | None) -> EstreeNode:
        return {"type": "ObjectExpression", "properties": properties, **location_fields(span)}

    def make_binary(self, operator: str, left: Any, right: Any, span: Span | None) -> EstreeNode:
        return {
            "type": "BinaryExpression",
            "operator": operator,
            "left": left,
            "right": right,
            **location_fields(span),
        }

    def make_call(self, callee: str, arguments: list[Any], span: Span | None) -> EstreeNode:
        return {
            "type": "CallExpression",
            "callee": {"type": "Identifier", "name": callee, **location_fields(span)},
            "arguments": arguments,
            **location_fields(span),
        }

    def attach_trailing_comments(self, node: EstreeNode, comments: Sequence[EstreeNode]) -> EstreeNode:
        result = dict(node)
        existing = list(node.get("trailingComments") or [])
        result["trailingComments"] = existing + [self._comment(c) for c in comments]
        return result

    def _comment(self, comment: EstreeNode) -> EstreeNode:
        block = comment.get("type") in ("CommentBlock", "Block")
        if self.flavor == "babel":
            kind = "CommentBlock" if block else "CommentLine"
        else:
            kind = "Block" if block else "Line"
        return {**comment, "type": kind}


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def rewrite_tree(tree: Any, rewriter: TagRewriter) -> Any:
    """Return a rewritten copy of *tree*; the input is left untouched."""
    return _walk(tree, rewriter, braced=False)


def _walk(value: Any, rewriter: TagRewriter, braced: bool) -> Any:
    if isinstance(value, list):
        return [_walk(item, rewriter, braced) for item in value]
    if not isinstance(value, dict):
        return value

    if value.get("type") == "JSXElement":
        replacement = rewriter.rewrite(value)
        if replacement is not None:
            if braced:
                return {
                    "type": "JSXExpressionContainer",
                    "expression": replacement,
                    **location_fields(span_of(replacement)),
                }
            return replacement

    kind = value.get("type")
    result: dict[str, Any] = {}
    for key, item in value.items():
        slot = (kind in ("JSXElement", "JSXFragment") and key == "children") or (
            kind == "JSXAttribute" and key == "value"
        )
        result[key] = _walk(item, rewriter, slot)
    return result


def transform_tree(tree: Any, reporter: Reporter, *, flavor: str = "babel") -> Any:
    """Lower every i18n tag in an ESTree *tree*."""
    return rewrite_tree(tree, TagRewriter(EstreeAdapter(flavor), reporter))
