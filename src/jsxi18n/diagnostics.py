"""Location-tagged warnings for malformed i18n tags."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass

from jsxi18n.tokens import Position, Span


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A warning about one node. ``filename`` is already relative."""

    filename: str
    span: Span | None
    message: str

    @property
    def position(self) -> Position:
        if self.span is None:
            return Position(0, 0, 0)
        return self.span.start

    def format(self) -> str:
        """``<path>@<line>:<column> <message>``"""
        return f"{self.filename}@{self.position.line}:{self.position.column} {self.message}"


Sink = Callable[[Diagnostic], None]


def relative_filename(filename: str | None, base_dir: str | None = None) -> str:
    """Path of *filename* relative to *base_dir* (default: working directory).

    Files outside the base directory keep their absolute path; a missing
    filename is reported as ``unknown``.
    """
    if not filename:
        return "unknown"
    base = os.path.abspath(base_dir) if base_dir else os.getcwd()
    path = os.path.abspath(filename)
    try:
        rel = os.path.relpath(path, base)
    except ValueError:
        # Different drive on Windows
        return path
    if rel == ".." or rel.startswith(".." + os.sep):
        return path
    return rel


def stderr_sink(diagnostic: Diagnostic) -> None:
    """Default sink: one ``WARNING:`` line on stderr."""
    print(f"WARNING: {diagnostic.format()}", file=sys.stderr)


def null_sink(diagnostic: Diagnostic) -> None:
    """Sink for ``--quiet``."""


class DiagnosticCollector:
    """Sink that keeps diagnostics in a list, for tests and the LSP server."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def messages(self) -> list[str]:
        return [d.format() for d in self.diagnostics]


class Reporter:
    """Binds a sink to one file so the rewriter only supplies span and message."""

    def __init__(self, sink: Sink, filename: str | None, base_dir: str | None = None) -> None:
        self._sink = sink
        self.filename = relative_filename(filename, base_dir)

    def warn(self, span: Span | None, message: str) -> None:
        self._sink(Diagnostic(self.filename, span, message))
