"""Links: the pieces each player moves around the board."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass
class Link:
    """A single link, either data or a virus, with a strength of 1 to 4."""

    is_data: bool
    strength: int
    identifier: str
    revealed: bool = False
    jumps: int = 1
    knocked_out: bool = False

    def display(self, reveal: bool) -> str:
        """Return the link as shown on the board summary, e.g. ``a: D4`` or ``a: ?``."""
        if reveal:
            kind = "D" if self.is_data else "V"
            return f"{self.identifier}: {kind}{self.strength}"
        return f"{self.identifier}: ?"

    def copy(self) -> Link:
        """Return an independent copy of this link."""
        return dataclasses.replace(self)