"""Minimal LSP server for JSX i18n tags, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from jsxi18n import __version__
from jsxi18n.diagnostics import DiagnosticCollector, Reporter
from jsxi18n.errors import LexError, ParseError
from jsxi18n.native import transform_program
from jsxi18n.parser import parse
from jsxi18n.tokens import Span

server = LanguageServer("jsxi18n-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _range(span: Span | None) -> Range:
    # Lines are 1-based here and 0-based in LSP; columns are 0-based in both
    if span is None:
        return Range(start=Position(line=0, character=0), end=Position(line=0, character=0))
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column),
        end=Position(line=span.end.line - 1, character=span.end.column),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse and rewrite the document, then publish errors and warnings."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        program = parse(source, filename)
    except LexError as exc:
        line = exc.position.line - 1
        col = exc.position.column
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="jsxi18n",
            )
        )
    except ParseError as exc:
        diagnostics.append(
            Diagnostic(
                range=_range(exc.span),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="jsxi18n",
            )
        )
    else:
        collector = DiagnosticCollector()
        transform_program(program, source, Reporter(collector, filename))
        for warning in collector.diagnostics:
            diagnostics.append(
                Diagnostic(
                    range=_range(warning.span),
                    message=warning.message,
                    severity=DiagnosticSeverity.Warning,
                    source="jsxi18n",
                )
            )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
