"""Error types with formatted source context."""

from __future__ import annotations

from jsxi18n.tokens import Position, Span


def _source_line(source: str, line: int) -> str:
    lines = source.splitlines(keepends=True)
    idx = line - 1
    if 0 <= idx < len(lines):
        return lines[idx].rstrip("\n").rstrip("\r")
    return ""


def _snippet(message: str, filename: str, start: Position, underline_len: int, line_text: str) -> str:
    pad = " " * start.column
    carets = "^" * underline_len

    line_num = str(start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{start.line}:{start.column}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {line_text}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str, filename: str = "input.jsx") -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        line_text = _source_line(self.source, self.position.line)
        # At least 1 char, but stay within line
        underline_len = max(1, min(2, len(line_text) - self.position.column))
        return _snippet(
            self.message, filename or self.filename, self.position, underline_len, line_text
        )


class ParseError(Exception):
    """Raised on the first parse error, with span and source context."""

    def __init__(self, message: str, span: Span, source: str, filename: str = "input.jsx") -> None:
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        line_text = _source_line(self.source, self.span.start.line)
        col = self.span.start.column

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(line_text) - col)

        return _snippet(self.message, filename or self.filename, self.span.start, underline_len, line_text)
