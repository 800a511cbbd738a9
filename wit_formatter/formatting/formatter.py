from __future__ import annotations

from dataclasses import dataclass

from wit_formatter.formatting.classify import classify, split_trailing_comment
from wit_formatter.formatting.config import FormatConfig
from wit_formatter.formatting.indent import IndentTracker
from wit_formatter.formatting.rules import rewrite


@dataclass
class FormatResult:
    text: str
    stats: dict[str, int]


def _split_lines(text: str) -> list[str]:
    # Universal newlines; a trailing "\n" yields a final empty line so it round-trips.
    if "\r" in text:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.split("\n")


def _next_content_lines(lines: list[str]) -> list[str | None]:
    """For each index, the next non-blank line after it (trimmed), or None."""

    out: list[str | None] = [None] * len(lines)
    nxt: str | None = None
    for i in range(len(lines) - 1, -1, -1):
        out[i] = nxt
        trimmed = lines[i].strip()
        if trimmed:
            nxt = trimmed
    return out


def _bump(stats: dict[str, int], key: str) -> None:
    stats[key] = stats.get(key, 0) + 1


def format_document(content: str, config: FormatConfig | None = None) -> FormatResult:
    """Reformat WIT source in a single pass.

    Never raises: lines that match no known construct keep their content and
    only get re-indented.
    """

    cfg = config or FormatConfig()
    unit = cfg.indent_unit()
    lines = _split_lines(content)
    lookahead = _next_content_lines(lines)
    tracker = IndentTracker()

    stats: dict[str, int] = {"lines": len(lines)}
    out: list[str] = []

    for i, raw in enumerate(lines):
        trimmed = raw.strip()
        if not trimmed:
            out.append("")
            _bump(stats, "blank_lines")
            if raw:
                _bump(stats, "changed_lines")
            continue

        if tracker.is_comment(trimmed):
            line = unit * tracker.indent_for(trimmed) + trimmed
            tracker.end_comment(trimmed)
            _bump(stats, "comment_lines")
        else:
            tracker.begin_line(trimmed)
            # Only the code before a trailing `// note` is rewritten and drives state.
            code, note = split_trailing_comment(trimmed)
            kind = classify(code)
            text = rewrite(code, kind)
            line = unit * tracker.indent_for(text) + (f"{text} {note}" if note else text)
            tracker.end_line(text, lookahead[i])
            _bump(stats, f"kind_{kind}")

        if line != raw:
            _bump(stats, "changed_lines")
        out.append(line)

    return FormatResult(text="\n".join(out), stats=stats)


def format_wit(content: str, config: FormatConfig | None = None) -> str:
    return format_document(content, config).text
