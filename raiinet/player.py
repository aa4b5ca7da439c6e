"""Players: their links, downloads and ability stock."""

from __future__ import annotations

from dataclasses import dataclass, field

from raiinet.link import Link


@dataclass
class Player:
    """A player's downloads, links and remaining ability uses."""

    downloaded_data: int = 0
    downloaded_viruses: int = 0
    ability_available: bool = True
    links: list[Link] = field(default_factory=list)
    abilities: dict[str, int] = field(default_factory=dict)

    def ability_usage(self, ability: str) -> int:
        """Return how many uses of ``ability`` remain (0 if never granted)."""
        return self.abilities.get(ability, 0)

    def add_downloaded_data(self) -> None:
        self.downloaded_data += 1

    def add_downloaded_virus(self) -> None:
        self.downloaded_viruses += 1

    def decrement_ability_usage(self, ability: str) -> None:
        """Use up one charge of a granted ability, never going below zero."""
        if self.abilities.get(ability, 0) > 0:
            self.abilities[ability] -= 1

    def increment_ability_usage(self, ability: str) -> None:
        """Give back one charge of an ability the player was granted."""
        if ability in self.abilities:
            self.abilities[ability] += 1

    def add_link(self, link: Link) -> None:
        self.links.append(link)

    def has_ability(self, ability: str) -> bool:
        """True if the player still has at least one use of ``ability``."""
        return self.abilities.get(ability, 0) > 0

    def ability_count(self) -> int:
        """Total number of ability uses left."""
        return sum(self.abilities.values())

    def display_links(self, is_player1_turn: bool, player: int) -> str:
        """Render this player's links, hiding unrevealed ones from the opponent."""
        hide = (is_player1_turn and player == 2) or (not is_player1_turn and player == 1)
        parts: list[str] = []
        for count, link in enumerate(self.links, start=1):
            shown = link.revealed if hide else True
            parts.append(link.display(shown) + " ")
            if count == 4:
                parts.append("\n")
        parts.append("\n")
        return "".join(parts)

    def download_link(self, link: Link) -> None:
        """Record a download of ``link`` according to its type."""
        if link.is_data:
            self.add_downloaded_data()
        else:
            self.add_downloaded_virus()