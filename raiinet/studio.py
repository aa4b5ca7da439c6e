"""The subject that board views observe."""

from __future__ import annotations

from typing import Any

from raiinet.observer import Subject

_NON_LINK_CELLS = frozenset(".+Smw")


class Studio(Subject):
    """Wraps a game and notifies views when asked to render."""

    def __init__(self, game: Any) -> None:
        super().__init__()
        self.game = game

    def render(self) -> None:
        self.notify_observers()

    def state(self, row: int, col: int) -> str:
        return self.game.state(row, col)

    def data_or_virus(self, row: int, col: int) -> str:
        """Return 'D' or 'V' for a revealed link at the cell, otherwise 'U'."""
        cell = self.game.state(row, col)
        if cell not in _NON_LINK_CELLS:
            link = self.game.link(cell)
            if link.revealed:
                return "D" if link.is_data else "V"
        return "U"