"""Lower <$_> and <$i18nDoNotTranslate> JSX tags into i18n function calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jsxi18n.diagnostics import Sink

__version__ = "0.1.0"


def transform(
    source: str,
    filename: str = "input.jsx",
    *,
    retain_lines: bool = True,
    sink: Sink | None = None,
    base_dir: str | None = None,
) -> str:
    """Parse JSX source, lower its i18n tags, and return the new source."""
    from jsxi18n.diagnostics import Reporter, stderr_sink
    from jsxi18n.native import transform_program
    from jsxi18n.parser import parse

    program = parse(source, filename)
    reporter = Reporter(sink if sink is not None else stderr_sink, filename, base_dir)
    return transform_program(program, source, reporter, retain_lines=retain_lines)


def transform_estree(
    tree: Any,
    filename: str | None = None,
    *,
    flavor: str = "babel",
    sink: Sink | None = None,
    base_dir: str | None = None,
) -> Any:
    """Lower the i18n tags of an ESTree (JSON) syntax tree."""
    from jsxi18n.diagnostics import Reporter, stderr_sink
    from jsxi18n.estree import transform_tree

    reporter = Reporter(sink if sink is not None else stderr_sink, filename, base_dir)
    return transform_tree(tree, reporter, flavor=flavor)
