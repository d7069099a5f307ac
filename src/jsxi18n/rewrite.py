"""Lowering of ``<$_>`` and ``<$i18nDoNotTranslate>`` elements into calls.

    <$_ first="Motoko" last="Kusanagi">Hello, {name}!</$_>

becomes

    $_({first: "Motoko", last: "Kusanagi"}, "Hello, ", name, "!")

The rewriter never touches a tree directly: it reads elements and builds
replacement nodes through a `HostAdapter`, so the same algorithm serves
the native JSX tree (`jsxi18n.native`) and ESTree JSON (`jsxi18n.estree`).
Matching happens when an element is entered, so an i18n tag nested inside
another one is passed through as an ordinary child, not lowered.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum, auto
from typing import Any, Protocol

from jsxi18n.diagnostics import Reporter
from jsxi18n.strings import normalize_whitespace
from jsxi18n.tokens import Span

TAG_NAMES = ("$_", "$i18nDoNotTranslate")


class ChildKind(Enum):
    TEXT = auto()
    EMPTY_EXPRESSION = auto()  # {} or {/* comment */}
    EXPRESSION = auto()
    OTHER = auto()  # nested elements, fragments, anything else


class HostAdapter(Protocol):
    """Node access and construction for one host tree format."""

    # Reading

    def element_name(self, node: Any) -> str | None: ...

    def element_span(self, node: Any) -> Span | None: ...

    def node_span(self, node: Any) -> Span | None: ...

    def attributes(self, node: Any) -> Sequence[Any]: ...

    def attribute(self, attr: Any) -> tuple[str | None, Any]:
        """(name, value) with one container level removed; name is None for a spread."""
        ...

    def children(self, node: Any) -> Sequence[Any]: ...

    def classify(self, child: Any) -> ChildKind: ...

    def text_value(self, child: Any) -> str: ...

    def comments(self, child: Any) -> Sequence[Any]: ...

    def expression(self, child: Any) -> Any: ...

    # Building

    def make_null(self) -> Any: ...

    def make_string(self, value: str, span: Span | None) -> Any: ...

    def make_object_property(self, key: str, value: Any) -> Any: ...

    def make_spread_property(self, argument: Any) -> Any: ...

    def make_object(self, properties: list[Any], span: Span | None) -> Any: ...

    def make_binary(self, operator: str, left: Any, right: Any, span: Span | None) -> Any: ...

    def make_call(self, callee: str, arguments: list[Any], span: Span | None) -> Any: ...

    def attach_trailing_comments(self, node: Any, comments: Sequence[Any]) -> Any:
        """Return node (or a copy) with comments appended as trailing comments."""
        ...


def join_strings(host: HostAdapter, strings: Sequence[Any]) -> Any:
    """Fold string literals into ``((s1 + s2) + s3) + ...``.

    A single literal is returned as is. Each join node spans from the first
    literal's start to the end of its right operand, so the outermost node
    covers the whole run.
    """
    result = strings[0]
    if len(strings) == 1:
        return result

    first = host.node_span(result)
    for literal in strings[1:]:
        last = host.node_span(literal)
        span = Span(first.start, last.end) if first is not None and last is not None else None
        result = host.make_binary("+", result, literal, span)
    return result


class TagRewriter:
    """Replace i18n elements with calls; leave every other node alone."""

    def __init__(self, host: HostAdapter, reporter: Reporter) -> None:
        self._host = host
        self._reporter = reporter

    def rewrite(self, node: Any) -> Any | None:
        """Return the replacement call for *node*, or None if it is not an i18n tag."""
        name = self._host.element_name(node)
        if name not in TAG_NAMES:
            return None
        return self._lower(node, name)

    def _lower(self, node: Any, tag: str) -> Any:
        host = self._host
        span = host.element_span(node)
        children = host.children(node)

        if not children:
            self._reporter.warn(span, f"<{tag}> has no children")

        args: list[Any] = [self._options(node)]
        strings: list[Any] = []

        for child in children:
            kind = host.classify(child)
            if kind is ChildKind.TEXT:
                value = normalize_whitespace(host.text_value(child))
                if value:
                    strings.append(host.make_string(value, host.node_span(child)))
            elif kind is ChildKind.EMPTY_EXPRESSION:
                comments = host.comments(child)
                if args and comments:
                    args[-1] = host.attach_trailing_comments(args[-1], comments)
            else:
                if strings:
                    args.append(join_strings(host, strings))
                    strings = []
                if kind is ChildKind.EXPRESSION:
                    args.append(host.expression(child))
                else:
                    args.append(child)

        if strings:
            args.append(join_strings(host, strings))

        return host.make_call(tag, args, span)

    def _options(self, node: Any) -> Any:
        host = self._host
        attributes = host.attributes(node)
        if not attributes:
            return host.make_null()

        properties = []
        for attr in attributes:
            key, value = host.attribute(attr)
            if key is None:
                properties.append(host.make_spread_property(value))
            else:
                properties.append(host.make_object_property(key, value))

        first = host.node_span(attributes[0])
        last = host.node_span(attributes[-1])
        span = Span(first.start, last.end) if first is not None and last is not None else None
        return host.make_object(properties, span)
