"""Tests for the ESTree (Babel JSON) host."""

from __future__ import annotations

import copy

import pytest

from jsxi18n import transform_estree
from jsxi18n.diagnostics import DiagnosticCollector, Reporter
from jsxi18n.estree import EstreeAdapter, location_fields, span_of, transform_tree
from jsxi18n.tokens import Position, Span


# ---------------------------------------------------------------------------
# Tree builders
# ---------------------------------------------------------------------------


def _at(line: int, column: int, offset: int, end_line: int, end_column: int, end_offset: int) -> dict:
    return location_fields(
        Span(Position(line, column, offset), Position(end_line, end_column, end_offset))
    )


def _element(name, children=(), attributes=(), loc=None, member=False) -> dict:
    if member:
        tag = {
            "type": "JSXMemberExpression",
            "object": {"type": "JSXIdentifier", "name": name},
            "property": {"type": "JSXIdentifier", "name": "x"},
        }
    else:
        tag = {"type": "JSXIdentifier", "name": name}
    return {
        "type": "JSXElement",
        "openingElement": {
            "type": "JSXOpeningElement",
            "name": tag,
            "attributes": list(attributes),
            "selfClosing": not children,
        },
        "closingElement": {"type": "JSXClosingElement", "name": dict(tag)} if children else None,
        "children": list(children),
        **(loc or {}),
    }


def _text(value: str, loc=None) -> dict:
    return {"type": "JSXText", "value": value, "extra": {"raw": value, "rawValue": value}, **(loc or {})}


def _container(expression: dict) -> dict:
    return {"type": "JSXExpressionContainer", "expression": expression}


def _empty(*comments: str) -> dict:
    inner = [{"type": "CommentBlock", "value": c} for c in comments]
    return _container({"type": "JSXEmptyExpression", "innerComments": inner})


def _attr(name: str, value: dict | None) -> dict:
    return {"type": "JSXAttribute", "name": {"type": "JSXIdentifier", "name": name}, "value": value}


def _string(value: str) -> dict:
    return {"type": "StringLiteral", "value": value}


def _ident(name: str) -> dict:
    return {"type": "Identifier", "name": name}


def _program(expression: dict) -> dict:
    return {
        "type": "File",
        "program": {
            "type": "Program",
            "body": [{"type": "ExpressionStatement", "expression": expression}],
        },
    }


def _expression(tree: dict) -> dict:
    return tree["program"]["body"][0]["expression"]


def _rewrite(node: dict, flavor: str = "babel", sink=None) -> dict:
    reporter = Reporter(sink if sink is not None else DiagnosticCollector(), "test.jsx")
    return _expression(transform_tree(_program(node), reporter, flavor=flavor))


# ---------------------------------------------------------------------------
# Babel flavor
# ---------------------------------------------------------------------------


class TestBabelFlavor:
    def test_call_shape(self) -> None:
        call = _rewrite(_element("$_", [_text("Hello")]))
        assert call["type"] == "CallExpression"
        assert call["callee"] == {"type": "Identifier", "name": "$_"}
        assert call["arguments"][0] == {"type": "NullLiteral"}
        assert call["arguments"][1] == {
            "type": "StringLiteral",
            "value": "Hello",
            "extra": {"rawValue": "Hello", "raw": '"Hello"'},
        }

    def test_do_not_translate(self) -> None:
        call = _rewrite(_element("$i18nDoNotTranslate", [_container(_ident("sku"))]))
        assert call["callee"]["name"] == "$i18nDoNotTranslate"
        assert call["arguments"][1] == _ident("sku")

    def test_options_object(self) -> None:
        node = _element(
            "$_",
            [_text("Hello, "), _container(_ident("name")), _text("!")],
            [_attr("first", _string("Motoko")), _attr("last", _string("Kusanagi"))],
        )
        call = _rewrite(node)
        options = call["arguments"][0]
        assert options["type"] == "ObjectExpression"
        first, last = options["properties"]
        assert first["type"] == "ObjectProperty"
        assert first["key"] == {"type": "Identifier", "name": "first"}
        assert first["value"] == _string("Motoko")
        assert last["value"] == _string("Kusanagi")
        assert [a.get("value", a.get("name")) for a in call["arguments"][1:]] == ["Hello, ", "name", "!"]

    def test_non_identifier_key_is_string(self) -> None:
        call = _rewrite(_element("$_", [_text("x")], [_attr("data-id", _string("7"))]))
        key = call["arguments"][0]["properties"][0]["key"]
        assert key["type"] == "StringLiteral"
        assert key["value"] == "data-id"

    def test_namespaced_attribute(self) -> None:
        attr = {
            "type": "JSXAttribute",
            "name": {
                "type": "JSXNamespacedName",
                "namespace": {"type": "JSXIdentifier", "name": "xlink"},
                "name": {"type": "JSXIdentifier", "name": "href"},
            },
            "value": _string("#a"),
        }
        call = _rewrite(_element("$_", [_text("x")], [attr]))
        assert call["arguments"][0]["properties"][0]["key"]["value"] == "xlink:href"

    def test_bare_attribute_is_true(self) -> None:
        call = _rewrite(_element("$_", [_text("x")], [_attr("plural", None)]))
        assert call["arguments"][0]["properties"][0]["value"] == {"type": "BooleanLiteral", "value": True}

    def test_expression_attribute_unwrapped(self) -> None:
        call = _rewrite(_element("$_", [_text("x")], [_attr("n", _container(_ident("count")))]))
        assert call["arguments"][0]["properties"][0]["value"] == _ident("count")

    def test_spread_attribute(self) -> None:
        spread = {"type": "JSXSpreadAttribute", "argument": _ident("opts")}
        call = _rewrite(_element("$_", [_text("x")], [spread]))
        assert call["arguments"][0]["properties"][0] == {"type": "SpreadElement", "argument": _ident("opts")}

    def test_comment_only_child(self) -> None:
        call = _rewrite(_element("$_", [_empty(" note ")]))
        assert call["arguments"] == [
            {"type": "NullLiteral", "trailingComments": [{"type": "CommentBlock", "value": " note "}]}
        ]

    def test_split_text_is_joined(self) -> None:
        call = _rewrite(_element("$_", [_text("foo"), _empty("c"), _text("bar")]))
        joined = call["arguments"][1]
        assert joined["type"] == "BinaryExpression"
        assert joined["operator"] == "+"
        assert joined["left"]["value"] == "foo"
        assert joined["right"]["value"] == "bar"

    def test_whitespace_normalized(self) -> None:
        call = _rewrite(_element("$_", [_text("\n  Hello,\n  world\n")]))
        assert call["arguments"][1]["value"] == "Hello, world"

    def test_whitespace_only_text_dropped(self) -> None:
        call = _rewrite(_element("$_", [_text("\n  "), _container(_ident("x")), _text("\n")]))
        assert len(call["arguments"]) == 2

    def test_nested_element_passthrough(self) -> None:
        inner = _element("$_", [_text("inner")])
        call = _rewrite(_element("$_", [inner]))
        assert call["arguments"][1] == inner


# ---------------------------------------------------------------------------
# ESTree flavor
# ---------------------------------------------------------------------------


class TestEstreeFlavor:
    def test_literals(self) -> None:
        call = _rewrite(_element("$_", [_text("Hi")]), flavor="estree")
        assert call["arguments"][0] == {"type": "Literal", "value": None, "raw": "null"}
        assert call["arguments"][1] == {"type": "Literal", "value": "Hi", "raw": '"Hi"'}

    def test_property(self) -> None:
        call = _rewrite(_element("$_", [_text("x")], [_attr("a", _string("1"))]), flavor="estree")
        prop = call["arguments"][0]["properties"][0]
        assert prop["type"] == "Property"
        assert prop["kind"] == "init"
        assert prop["key"] == {"type": "Identifier", "name": "a"}

    def test_literal_text_child(self) -> None:
        text = {"type": "Literal", "value": "\n  Old style\n", "raw": "\n  Old style\n"}
        call = _rewrite(_element("$_", [text]), flavor="estree")
        assert call["arguments"][1]["value"] == "Old style"

    def test_comment_type(self) -> None:
        call = _rewrite(_element("$_", [_empty("c")]), flavor="estree")
        assert call["arguments"][0]["trailingComments"] == [{"type": "Block", "value": "c"}]

    def test_unknown_flavor(self) -> None:
        with pytest.raises(ValueError, match="unknown ESTree flavor"):
            EstreeAdapter("acorn")


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


class TestTraversal:
    def test_other_elements_untouched(self) -> None:
        node = _element("div", [_text("hi")])
        assert _rewrite(node) == node

    def test_member_expression_name_not_matched(self) -> None:
        node = _element("$_", [_text("hi")], member=True)
        assert _rewrite(node) == node

    def test_child_replacement_is_wrapped(self) -> None:
        div = _rewrite(_element("div", [_element("$_", [_text("Hi")])]))
        child = div["children"][0]
        assert child["type"] == "JSXExpressionContainer"
        assert child["expression"]["type"] == "CallExpression"

    def test_attribute_value_replacement_is_wrapped(self) -> None:
        node = _element("input", attributes=[_attr("placeholder", _element("$_", [_text("Name")]))])
        value = _rewrite(node)["openingElement"]["attributes"][0]["value"]
        assert value["type"] == "JSXExpressionContainer"
        assert value["expression"]["callee"]["name"] == "$_"

    def test_container_expression_not_double_wrapped(self) -> None:
        node = _element("div", [_container(_element("$_", [_text("Hi")]))])
        child = _rewrite(node)["children"][0]
        assert child["type"] == "JSXExpressionContainer"
        assert child["expression"]["type"] == "CallExpression"

    def test_input_not_mutated(self) -> None:
        tree = _program(_element("div", [_element("$_", [_text("a"), _empty("c"), _text("b")])]))
        before = copy.deepcopy(tree)
        transform_tree(tree, Reporter(DiagnosticCollector(), "test.jsx"))
        assert tree == before

    def test_non_node_values_copied(self) -> None:
        tree = {"type": "File", "comments": [], "tokens": None, "program": {"type": "Program", "body": []}}
        assert transform_tree(tree, Reporter(DiagnosticCollector(), "t.jsx")) == tree


# ---------------------------------------------------------------------------
# Locations and diagnostics
# ---------------------------------------------------------------------------


class TestLocations:
    def test_span_of(self) -> None:
        node = {"type": "X", **_at(2, 4, 10, 3, 1, 20)}
        assert span_of(node) == Span(Position(2, 4, 10), Position(3, 1, 20))

    def test_span_of_without_loc(self) -> None:
        assert span_of({"type": "X"}) is None
        assert span_of(None) is None

    def test_location_fields_without_span(self) -> None:
        assert location_fields(None) == {}

    def test_call_keeps_element_location(self) -> None:
        loc = _at(3, 2, 30, 5, 8, 70)
        call = _rewrite(_element("$_", [_text("x")], loc=loc))
        assert call["loc"] == loc["loc"]
        assert (call["start"], call["end"]) == (30, 70)
        assert call["callee"]["loc"] == loc["loc"]

    def test_join_spans_text_run(self) -> None:
        children = [
            _text("foo", _at(1, 4, 4, 1, 7, 7)),
            _empty("c"),
            _text("bar", _at(1, 16, 16, 1, 19, 19)),
        ]
        joined = _rewrite(_element("$_", children))["arguments"][1]
        assert (joined["start"], joined["end"]) == (4, 19)
        assert joined["left"]["loc"]["start"] == {"line": 1, "column": 4}


class TestDiagnostics:
    def test_empty_tag_warns(self) -> None:
        sink = DiagnosticCollector()
        call = _rewrite(_element("$_", loc=_at(4, 2, 40, 4, 9, 47)), sink=sink)
        assert call["arguments"] == [{"type": "NullLiteral"}]
        assert sink.messages() == ["test.jsx@4:2 <$_> has no children"]

    def test_warning_without_location(self) -> None:
        sink = DiagnosticCollector()
        _rewrite(_element("$i18nDoNotTranslate"), sink=sink)
        assert sink.messages() == ["test.jsx@0:0 <$i18nDoNotTranslate> has no children"]

    def test_empty_collector_receives_warning(self, capsys) -> None:
        sink = DiagnosticCollector()
        transform_estree(_program(_element("$_")), "p.jsx", sink=sink)
        assert sink.messages() == ["p.jsx@0:0 <$_> has no children"]
        assert capsys.readouterr().err == ""

    def test_transform_estree_api(self) -> None:
        sink = DiagnosticCollector()
        tree = _program(_element("$_"))
        result = transform_estree(tree, sink=sink)
        assert _expression(result)["type"] == "CallExpression"
        assert sink.messages() == ["unknown@0:0 <$_> has no children"]
