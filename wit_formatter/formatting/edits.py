from __future__ import annotations

import re
from dataclasses import dataclass

from wit_formatter.formatting.config import FormatConfig
from wit_formatter.formatting.formatter import format_wit

_line_break_re = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class TextEdit:
    start: Position
    end: Position
    new_text: str


def end_position(text: str) -> Position:
    """Position just past the last character of `text` (zero-based line/character)."""

    parts = _line_break_re.split(text)
    return Position(line=len(parts) - 1, character=len(parts[-1]))


def document_formatting_edits(content: str, config: FormatConfig | None = None) -> list[TextEdit]:
    """Editor-host decision: no edits when already formatted, else one full replacement."""

    formatted = format_wit(content, config)
    if formatted == content:
        return []
    return [TextEdit(start=Position(0, 0), end=end_position(content), new_text=formatted)]
