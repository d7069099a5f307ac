"""JavaScript printer for rewritten nodes.

Only the node types the rewriter produces get printed; opaque expressions
and passed-through elements are copied from the original source.
"""

from __future__ import annotations

from jsxi18n.ast import (
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    Comment,
    Expression,
    Identifier,
    JSXElement,
    JSXFragment,
    Node,
    NullLiteral,
    ObjectExpression,
    Property,
    SpreadElement,
    StringLiteral,
)
from jsxi18n.strings import quote_string
from jsxi18n.tokens import is_identifier


def render_expression(node: Node, source: str, *, retain_lines: bool = True) -> str:
    """Print *node* as JavaScript.

    With *retain_lines*, line breaks are inserted so that each argument
    starts on its original line and a call ends on the line its element
    ended on; code after the replaced element then keeps its line numbers.
    """
    start_line = node.span.start.line if node.span is not None else 1
    printer = _Printer(source, retain_lines, start_line)
    printer.node(node)
    return printer.text()


class _Printer:
    def __init__(self, source: str, retain_lines: bool, line: int) -> None:
        self._source = source
        self._retain_lines = retain_lines
        self._line = line
        self._parts: list[str] = []

    def text(self) -> str:
        return "".join(self._parts)

    def write(self, text: str) -> None:
        self._parts.append(text)
        self._line += text.count("\n")

    def _behind(self, node: Node | Property | SpreadElement) -> bool:
        """True if *node* starts on a later line than the output has reached."""
        span = node.span
        return self._retain_lines and span is not None and span.start.line > self._line

    def catch_up(self, line: int) -> None:
        if self._retain_lines and line > self._line:
            self.write("\n" * (line - self._line))

    def separator(self, node: Node | Property | SpreadElement) -> None:
        """``, `` before a list item, or ``,`` when a line break follows."""
        self.write(",")
        if not self._behind(node):
            self.write(" ")

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def node(self, node: Node | Property | SpreadElement) -> None:
        if node.span is not None:
            self.catch_up(node.span.start.line)

        if isinstance(node, NullLiteral):
            self.write("null")
        elif isinstance(node, BooleanLiteral):
            self.write("true" if node.value else "false")
        elif isinstance(node, StringLiteral):
            self.write(quote_string(node.value))
        elif isinstance(node, Identifier):
            self.write(node.name)
        elif isinstance(node, Expression):
            self.write(node.source)
        elif isinstance(node, (JSXElement, JSXFragment)):
            self.write(self._source[node.span.start.offset : node.span.end.offset])
        elif isinstance(node, ObjectExpression):
            self._object(node)
        elif isinstance(node, Property):
            self._property(node)
        elif isinstance(node, SpreadElement):
            self.write("...")
            self.node(node.argument)
        elif isinstance(node, BinaryExpression):
            self.node(node.left)
            self.write(f" {node.operator} ")
            self.node(node.right)
        elif isinstance(node, CallExpression):
            self._call(node)
        else:
            raise TypeError(f"cannot render {type(node).__name__}")

        for comment in getattr(node, "trailing_comments", ()):
            self._comment(comment)

    def _object(self, node: ObjectExpression) -> None:
        self.write("{")
        for i, prop in enumerate(node.properties):
            if i:
                self.separator(prop)
            self.node(prop)
        self.write("}")

    def _property(self, node: Property) -> None:
        key = node.key if is_identifier(node.key) else quote_string(node.key)
        self.write(f"{key}: ")
        self.node(node.value)

    def _call(self, node: CallExpression) -> None:
        self.write(node.callee.name)
        self.write("(")
        for i, arg in enumerate(node.arguments):
            if i:
                self.separator(arg)
            self.node(arg)
        if node.span is not None:
            self.catch_up(node.span.end.line)
        self.write(")")

    def _comment(self, comment: Comment) -> None:
        # Line comments become block comments so the call stays intact
        body = comment.value if comment.kind == "block" else comment.value.replace("*/", "* /")
        self.write(f" /*{body}*/")
