"""End-to-end tests for source transformation through the native JSX host."""

from __future__ import annotations

import pytest

from jsxi18n import transform
from jsxi18n.diagnostics import DiagnosticCollector
from jsxi18n.errors import LexError, ParseError


def _transform(source: str, **kwargs) -> str:
    kwargs.setdefault("sink", DiagnosticCollector())
    return transform(source, "test.jsx", **kwargs)


class TestBasicTransform:
    def test_attributes_and_interpolation(self) -> None:
        source = 'var greeting = <$_ first="Motoko" last="Kusanagi">Hello, {name}!</$_>;'
        assert _transform(source) == (
            'var greeting = $_({first: "Motoko", last: "Kusanagi"}, "Hello, ", name, "!");'
        )

    def test_do_not_translate(self) -> None:
        source = "const c = <$i18nDoNotTranslate>{sku}</$i18nDoNotTranslate>;"
        assert _transform(source) == "const c = $i18nDoNotTranslate(null, sku);"

    def test_source_without_tags_unchanged(self) -> None:
        source = "// plain\nconst a = <div className='x'>{b}</div>;\nif (a < b) {}\n"
        assert _transform(source) == source

    def test_surrounding_code_untouched(self) -> None:
        source = "  foo( <$_>hi</$_> , bar ) /* tail */\n"
        assert _transform(source) == '  foo( $_(null, "hi") , bar ) /* tail */\n'

    def test_multiple_tags(self) -> None:
        source = "a = <$_>one</$_>;\nb = <$_>two</$_>;\n"
        assert _transform(source) == 'a = $_(null, "one");\nb = $_(null, "two");\n'


class TestPositions:
    def test_tag_inside_element_is_braced(self) -> None:
        source = 'var d = <div title="x"><$_>Hi</$_></div>;'
        assert _transform(source) == 'var d = <div title="x">{$_(null, "Hi")}</div>;'

    def test_tag_inside_fragment_is_braced(self) -> None:
        assert _transform("x = <><$_>Hi</$_></>;") == 'x = <>{$_(null, "Hi")}</>;'

    def test_tag_as_attribute_value_is_braced(self) -> None:
        source = "<input placeholder=<$_>Name</$_> />"
        assert _transform(source) == '<input placeholder={$_(null, "Name")} />'

    def test_tag_in_attribute_container(self) -> None:
        source = "<input placeholder={<$_>Name</$_>} />"
        assert _transform(source) == '<input placeholder={$_(null, "Name")} />'

    def test_tag_in_spread_attribute(self) -> None:
        source = "<a {...{title: <$_>T</$_>}} />"
        assert _transform(source) == '<a {...{title: $_(null, "T")}} />'

    def test_tag_in_child_expression(self) -> None:
        source = "<ul>{items.map(i => <li><$_>Item {i}</$_></li>)}</ul>"
        assert _transform(source) == '<ul>{items.map(i => <li>{$_(null, "Item ", i)}</li>)}</ul>'

    def test_tag_in_template_literal(self) -> None:
        source = "s = `${<$_>x</$_>}!`;"
        assert _transform(source) == 's = `${$_(null, "x")}!`;'

    def test_nested_same_tag_passed_through(self) -> None:
        source = "<$_>a<$_>b</$_></$_>"
        assert _transform(source) == '$_(null, "a", <$_>b</$_>)'

    def test_tag_inside_passed_through_element_not_lowered(self) -> None:
        source = "<$_>Click <b><$_>here</$_></b></$_>"
        assert _transform(source) == '$_(null, "Click ", <b><$_>here</$_></b>)'


class TestLineRetention:
    def test_following_lines_keep_numbers(self) -> None:
        source = "var a = <$_>\n    Hello,\n    world!\n</$_>;\nvar b = 1;\n"
        result = _transform(source)
        assert result == 'var a = $_(null, "Hello, world!"\n\n\n);\nvar b = 1;\n'
        assert result.splitlines()[4] == "var b = 1;"

    def test_line_count_preserved(self) -> None:
        source = (
            "render(\n"
            "  <div>\n"
            '    <$_ count={n}\n'
            '        unit="files">\n'
            "      Deleted {n}\n"
            "      {/* plural */}\n"
            "      items\n"
            "    </$_>\n"
            "  </div>\n"
            ");\n"
        )
        result = _transform(source)
        assert result.count("\n") == source.count("\n")
        assert result.splitlines()[-1] == ");"

    def test_retain_lines_off(self) -> None:
        source = "var a = <$_>\n    Hello\n</$_>;\nvar b = 1;\n"
        assert _transform(source, retain_lines=False) == 'var a = $_(null, "Hello");\nvar b = 1;\n'


class TestDiagnostics:
    def test_empty_tag_warns_and_still_rewrites(self) -> None:
        sink = DiagnosticCollector()
        assert _transform("var f = <$_ />;", sink=sink) == "var f = $_(null);"
        assert sink.messages() == ["test.jsx@1:8 <$_> has no children"]

    def test_warning_location_on_later_line(self) -> None:
        sink = DiagnosticCollector()
        _transform("a;\n\n  x = <$i18nDoNotTranslate></$i18nDoNotTranslate>", sink=sink)
        assert sink.messages() == ["test.jsx@3:6 <$i18nDoNotTranslate> has no children"]

    def test_empty_collector_receives_warning(self, capsys) -> None:
        sink = DiagnosticCollector()
        transform("x = <$_></$_>;", "p.jsx", sink=sink)
        assert sink.messages() == ["p.jsx@1:4 <$_> has no children"]
        assert capsys.readouterr().err == ""

    def test_default_sink_is_stderr(self, capsys) -> None:
        transform("<$_></$_>", "test.jsx")
        assert capsys.readouterr().err == "WARNING: test.jsx@1:0 <$_> has no children\n"

    def test_base_dir(self, tmp_path) -> None:
        sink = DiagnosticCollector()
        transform("<$_/>", str(tmp_path / "src" / "a.jsx"), sink=sink, base_dir=str(tmp_path))
        assert sink.diagnostics[0].filename.replace("\\", "/") == "src/a.jsx"


class TestLexing:
    def test_partial_entity_references_kept(self) -> None:
        source = "x = <$_>AT&T &copy2024 &ampfoo &notin;</$_>;"
        assert _transform(source) == 'x = $_(null, "AT&T &copy2024 &ampfoo \u2209");'

    def test_regex_after_if_head(self) -> None:
        source = "if (a) /<$_>/.test(s);\nx = <$_>Hi</$_>;"
        assert _transform(source) == 'if (a) /<$_>/.test(s);\nx = $_(null, "Hi");'


class TestErrors:
    def test_mismatched_tags(self) -> None:
        with pytest.raises(ParseError):
            _transform("<$_>hi</$i18nDoNotTranslate>")

    def test_unterminated_string(self) -> None:
        with pytest.raises(LexError):
            _transform("x = 'abc")
