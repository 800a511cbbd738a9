from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormatConfig:
    # Width of one indent unit when indenting with spaces.
    tab_size: int = 4
    # False selects one literal tab per level, whatever tab_size says.
    insert_spaces: bool = True

    def indent_unit(self) -> str:
        if not self.insert_spaces:
            return "\t"
        return " " * max(1, int(self.tab_size))
