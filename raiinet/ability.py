"""The special abilities players can apply to links."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from raiinet.link import Link
from raiinet.player import Player

if TYPE_CHECKING:
    pass


class _WallBoard(Protocol):
    def find_link_position(self, link_id: str) -> tuple[int, int]: ...

    def set_walls(self, link_id: str, x: int, y1: int, y2: int) -> bool: ...


BOOST_STRENGTH = 1


@dataclass
class Abilities:
    """Applies abilities and remembers which links carry walls."""

    link_with_walls: list[str] = field(default_factory=list)

    def link_boost(self, link: Link) -> None:
        """Let the link move one more square per move."""
        link.jumps += BOOST_STRENGTH

    def polarize(self, link: Link) -> None:
        """Turn data into a virus or a virus into data."""
        link.is_data = not link.is_data

    def firewall(self, player: Player, link: Link) -> None:
        """A data link is revealed; a virus is downloaded by ``player``."""
        if link.is_data:
            link.revealed = True
        else:
            player.download_link(link)

    def download(self, player: Player, link: Link) -> None:
        player.download_link(link)

    def scan(self, link: Link) -> None:
        link.revealed = True

    def exchange(self, first: Link, second: Link) -> None:
        """Swap strength and type between two links."""
        first.strength, second.strength = second.strength, first.strength
        first.is_data, second.is_data = second.is_data, first.is_data

    def craze(self, link: Link) -> None:
        link.strength += BOOST_STRENGTH

    def knock_out(self, link: Link) -> None:
        link.knocked_out = True

    def walls(self, link_id: str, game: _WallBoard) -> bool:
        """Place walls on both sides of the link; return whether it worked."""
        row, col = game.find_link_position(link_id)
        if game.set_walls(link_id, row, col - 1, col + 1):
            self.link_with_walls.append(link_id)
            return True
        return False

    def has_walls(self, link_id: str) -> bool:
        return link_id in self.link_with_walls

    def remove_walls(self, link_id: str) -> None:
        """Forget every wall entry for the link."""
        self.link_with_walls = [c for c in self.link_with_walls if c != link_id]