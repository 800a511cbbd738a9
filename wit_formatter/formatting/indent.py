from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from wit_formatter.formatting.classify import closes_block_comment, is_comment_line, opens_block_comment


class Continuation(StrEnum):
    NORMAL = "normal"
    GENERIC = "generic"
    FUNC_PARAMS = "func_params"


# type name = future<tuple<
_generic_alias_open_re = re.compile(r"^type\s+[^=]+=.*<\s*$")


def generic_balance(line: str) -> int:
    """Count of `<` minus `>`, ignoring the `>` of `->` arrows."""

    return line.count("<") - (line.count(">") - line.count("->"))


def opens_block(line: str) -> bool:
    return line.endswith("{") and "}" not in line


def enter_generic(line: str) -> int:
    """Initial depth of a multi-line generic alias opened by `line`, else 0."""

    if not _generic_alias_open_re.match(line):
        return 0
    return max(0, generic_balance(line))


def step_generic(depth: int, line: str) -> int:
    return max(0, depth + generic_balance(line))


def closes_generic(depth: int, line: str) -> bool:
    # The `>>;` terminator sits at the alias' own level.
    return line.startswith(">") and step_generic(depth, line) == 0


def opens_func_params(line: str, lookahead: str | None) -> bool:
    """A line ending in `func(` opens a parameter list on the following lines.

    When the next non-blank line is a pure comment the list is not tracked:
    doc comments directly after the opener would otherwise be read as
    parameters.
    """

    if not line.endswith("func("):
        return False
    if lookahead is None:
        return True
    return not is_comment_line(lookahead)


def closes_func_params(line: str) -> bool:
    return line.startswith(")")


@dataclass
class FormatterState:
    indent_level: int = 0
    generic_depth: int = 0
    in_func_params: bool = False
    in_block_comment: bool = False


class IndentTracker:
    """Brace depth plus the two multi-line continuation trackers.

    Per content line the facade calls `begin_line` (closing braces dedent
    before the line is placed), `indent_for` and then `end_line` with the
    emitted text. Comment lines, including every line of an open `/* ... */`
    block, go through `indent_for` and `end_comment` instead.
    """

    def __init__(self) -> None:
        self.state = FormatterState()

    def is_comment(self, line: str) -> bool:
        return self.state.in_block_comment or is_comment_line(line)

    def end_comment(self, line: str) -> None:
        st = self.state
        if st.in_block_comment:
            if closes_block_comment(line):
                st.in_block_comment = False
        elif opens_block_comment(line):
            st.in_block_comment = True

    def active(self) -> tuple[Continuation, ...]:
        out: list[Continuation] = []
        if self.state.generic_depth > 0:
            out.append(Continuation.GENERIC)
        if self.state.in_func_params:
            out.append(Continuation.FUNC_PARAMS)
        return tuple(out) or (Continuation.NORMAL,)

    def begin_line(self, line: str) -> None:
        if line.startswith("}"):
            self.state.indent_level = max(0, self.state.indent_level - 1)

    def indent_for(self, line: str) -> int:
        st = self.state
        level = st.indent_level
        if st.generic_depth > 0 and not closes_generic(st.generic_depth, line):
            level += 1
        if st.in_func_params and not closes_func_params(line):
            level += 1
        return level

    def end_line(self, line: str, lookahead: str | None = None) -> None:
        st = self.state
        if opens_block(line):
            st.indent_level += 1

        if st.in_func_params:
            if closes_func_params(line):
                st.in_func_params = False
        elif opens_func_params(line, lookahead):
            st.in_func_params = True

        if st.generic_depth > 0:
            st.generic_depth = step_generic(st.generic_depth, line)
        else:
            st.generic_depth = enter_generic(line)
