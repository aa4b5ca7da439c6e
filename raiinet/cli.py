"""Command interpreter and entry point for playing a game from the terminal."""

from __future__ import annotations

import random
import re
import sys
from typing import Callable, TextIO

from raiinet.game import NOT_FOUND, BOARD_SIZE, Game, InvalidLinkError
from raiinet.player import Player
from raiinet.studio import Studio

DEFAULT_ABILITIES = "LFDSP"
DEFAULT_LINKS = ("V1", "D4", "V3", "V2", "D3", "V4", "D2", "D1")
ABILITY_NAMES = {
    "L": "Link Boost",
    "F": "Firewall",
    "S": "Scan",
    "D": "Download",
    "P": "Polarize",
    "C": "Craze",
    "E": "Exchange",
    "K": "Knock Out",
    "W": "Walls",
}
MAX_ABILITY_COPIES = 2

_INTEGER = re.compile(r"[+-]?\d+")


class QuitGame(Exception):
    """Raised by the ``quit`` command to end the session."""


def randomize_links(rng: random.Random | None = None) -> list[str]:
    """Return the default link tokens in a random order."""
    links = list(DEFAULT_LINKS)
    (rng or random.Random()).shuffle(links)
    return links


def read_links_from_file(filename: str) -> list[str]:
    """Read whitespace-separated link tokens, falling back to the defaults."""
    try:
        with open(filename, encoding="utf-8") as handle:
            return handle.read().split()
    except OSError:
        print(f"Error: Unable to open file {filename}", file=sys.stderr)
        return list(DEFAULT_LINKS)


def is_valid_link_id(link_id: str | None) -> bool:
    """True for identifiers a..h and A..H."""
    return link_id is not None and len(link_id) == 1 and (
        "a" <= link_id <= "h" or "A" <= link_id <= "H"
    )


def _grant_abilities(player: Player, spec: str) -> None:
    for ability in spec:
        count = player.abilities.setdefault(ability, 0)
        if count < MAX_ABILITY_COPIES:
            player.abilities[ability] = count + 1


def _ability_ids(player: Player) -> dict[str, int]:
    ids = dict.fromkeys(ABILITY_NAMES, 0)
    next_id = 1
    for ability in sorted(player.abilities):
        if player.abilities[ability] > 0 and ability in ABILITY_NAMES:
            ids[ability] = next_id
            next_id += 1
    return ids


class _Tokens:
    """Reads a command's arguments the way a formatted input stream would."""

    def __init__(self, text: str) -> None:
        self._rest = text

    def word(self) -> str | None:
        parts = self._rest.split(maxsplit=1)
        if not parts:
            self._rest = ""
            return None
        self._rest = parts[1] if len(parts) > 1 else ""
        return parts[0]

    def char(self) -> str | None:
        stripped = self._rest.lstrip()
        if not stripped:
            self._rest = ""
            return None
        self._rest = stripped[1:]
        return stripped[0]

    def integer(self) -> int | None:
        stripped = self._rest.lstrip()
        match = _INTEGER.match(stripped)
        if match is None:
            self._rest = ""
            return None
        self._rest = stripped[match.end():]
        return int(match.group())


class CommandProcessor:
    """Interprets player commands against a game."""

    def __init__(
        self,
        game: Game,
        studio: Studio | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.game = game
        self.studio = studio
        self.out = out
        self.err = err
        self.ability_ids = {1: _ability_ids(game.player1), 2: _ability_ids(game.player2)}
        self._handlers: dict[str, Callable[[_Tokens], bool]] = {
            "L": self._link_boost,
            "F": self._firewall,
            "S": self._scan,
            "D": self._download,
            "P": self._polarize,
            "C": self._craze,
            "E": self._exchange,
            "W": self._walls,
            "K": self._knock_out,
        }

    # ----------------------------------------------------------------- output

    def _say(self, *parts: object, end: str = "\n") -> None:
        print(*parts, sep="", end=end, file=self.out)

    def _complain(self, message: str) -> None:
        print(message, file=self.err if self.err is not None else sys.stderr)

    def _current(self) -> tuple[Player, int]:
        if self.game.is_player1_turn:
            return self.game.player1, 1
        return self.game.player2, 2

    def _is_own(self, link_id: str) -> bool:
        if self.game.is_player1_turn:
            return "a" <= link_id <= "h"
        return "A" <= link_id <= "H"

    # --------------------------------------------------------------- commands

    def process(self, command: str) -> None:
        """Carry out one command line. Raises ``QuitGame`` on ``quit``."""
        tokens = _Tokens(command)
        action = tokens.word() or ""
        if action == "move":
            self._move(tokens)
        elif action == "abilities":
            self._list_abilities()
        elif action == "ability":
            self._use_ability(tokens)
        elif action == "board":
            self._say(self.game.display_board(), end="")
            if self.studio is not None:
                self.studio.render()
        elif action == "sequence":
            self._sequence(tokens)
        elif action == "quit":
            self._say("Quitting the game.")
            raise QuitGame
        else:
            self._complain("Error: Unknown command.")

    def run(self, stream: TextIO) -> None:
        """Read commands from ``stream`` until quit, end of input or game over."""
        while True:
            self._say("=" * 20)
            self._say("> ", end="")
            line = stream.readline()
            if not line:
                return
            try:
                self.process(line.rstrip("\r\n"))
            except QuitGame:
                return
            if self.game.is_game_over():
                return

    def _move(self, tokens: _Tokens) -> None:
        link_id = tokens.char()
        direction = tokens.word() or ""
        if not is_valid_link_id(link_id):
            self._complain("Invalid link selection!")
            return
        try:
            knocked_out = self.game.link(link_id).knocked_out
        except InvalidLinkError as error:
            self._complain(str(error))
            return
        if knocked_out:
            self._say(
                f"{link_id} is knocked out so it cannot move! A link on your team "
                f"must be next to {link_id} to save it!"
            )
            return
        previous = self.game.is_player1_turn
        try:
            self.game.process_move(link_id, direction)
        except ValueError as error:
            self._complain(str(error))
            return
        if self.game.is_player1_turn != previous:
            self.process("board")

    def _list_abilities(self) -> None:
        player, _ = self._current()
        ability_id = 1
        for ability in sorted(player.abilities):
            if ability in ABILITY_NAMES:
                self._say(
                    f"Ability ID: {ability_id}, Ability: {ABILITY_NAMES[ability]}, "
                    f"Available: {player.abilities[ability]}"
                )
                ability_id += 1

    def _sequence(self, tokens: _Tokens) -> None:
        filename = tokens.word()
        if filename is None:
            self._complain("Error: Invalid sequence command format.")
            return
        try:
            with open(filename, encoding="utf-8") as handle:
                lines = handle.read().splitlines()
        except OSError:
            self._complain(f"Error: Unable to open file {filename}.")
            return
        for line in lines:
            self.process(line)

    # -------------------------------------------------------------- abilities

    def _use_ability(self, tokens: _Tokens) -> None:
        ability_id = tokens.integer()
        if ability_id is None:
            self._complain("Error: Invalid ability command format.")
            return
        player, number = self._current()
        ability = next(
            (name for name, value in sorted(self.ability_ids[number].items()) if value == ability_id),
            None,
        )
        if not player.ability_available:
            self._say("You may only use an ability once per round!")
            return
        if ability is None or not player.has_ability(ability):
            self._say("You can no longer use this ability!")
            return
        player.decrement_ability_usage(ability)

        handler = self._handlers.get(ability)
        if handler is None:
            return
        if handler(tokens):
            player.ability_available = False
        else:
            player.increment_ability_usage(ability)
            player.ability_available = True

    def _link_argument(self, tokens: _Tokens) -> str | None:
        link_id = tokens.char()
        if not is_valid_link_id(link_id):
            self._complain("Invalid link!")
            return None
        return link_id

    def _link_boost(self, tokens: _Tokens) -> bool:
        link_id = tokens.char()
        if not is_valid_link_id(link_id):
            self._complain("Error: Invalid link for Link Boost.")
            return False
        try:
            self.game.ability.link_boost(self.game.link(link_id))
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        self._say(f"Link boost applied on {link_id}!")
        return True

    def _firewall(self, tokens: _Tokens) -> bool:
        row = tokens.integer()
        col = tokens.integer() if row is not None else None
        if row is None or col is None:
            self._complain("Error: Invalid coordinates for Firewall.")
            return False
        inside = 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE
        if not inside or self.game.state(row, col) != ".":
            self._complain("Firewall should be set in an empty block!")
            return False
        is_p1 = self.game.is_player1_turn
        self.game.firewall_board[row][col] = 1 if is_p1 else 2
        self.game.set_cell((row, col), "m" if is_p1 else "w")
        self._say(f"Firewall applied at [{row}][{col}]!")
        self.process("board")
        return True

    def _scan(self, tokens: _Tokens) -> bool:
        link_id = self._link_argument(tokens)
        if link_id is None:
            return False
        self._say(f"Scan applied on {link_id}!")
        if self._is_own(link_id):
            self._say("Scan applied on your own Link! Information unrevealed!")
            return False
        try:
            link = self.game.link(link_id)
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        self.game.ability.scan(link)
        self._say("Type: Data" if link.is_data else "Type: Virus")
        self._say(f"Strength: {link.strength}")
        self.process("board")
        return True

    def _download(self, tokens: _Tokens) -> bool:
        link_id = self._link_argument(tokens)
        if link_id is None:
            return False
        if self._is_own(link_id):
            self._say("Download cannot be applied on your own links!")
            return False
        try:
            link = self.game.link(link_id)
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        position = self.game.find_link_position(link_id)
        if position != NOT_FOUND:
            self.game.set_cell(position, ".")
        player, number = self._current()
        self.game.ability.download(player, link)
        self._say(f"Player {number} downloads {link_id}!")
        return True

    def _polarize(self, tokens: _Tokens) -> bool:
        link_id = self._link_argument(tokens)
        if link_id is None:
            return False
        try:
            self.game.ability.polarize(self.game.link(link_id))
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        self._say(f"Polarize applied on {link_id}!")
        return True

    def _craze(self, tokens: _Tokens) -> bool:
        link_id = self._link_argument(tokens)
        if link_id is None:
            return False
        try:
            self.game.ability.craze(self.game.link(link_id))
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        self._say(f"Craze applied on {link_id}!")
        return True

    def _exchange(self, tokens: _Tokens) -> bool:
        first = tokens.char()
        second = tokens.char()
        if not (is_valid_link_id(first) and is_valid_link_id(second)):
            self._complain("Invalid link!")
            return False
        try:
            self.game.ability.exchange(self.game.link(first), self.game.link(second))
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        self._say(f"Exchange applied on {first} and {second}!")
        return True

    def _walls(self, tokens: _Tokens) -> bool:
        link_id = self._link_argument(tokens)
        if link_id is None:
            return False
        if not self.game.ability.walls(link_id, self.game):
            self._say(f"Could not set up walls for: {link_id}")
            return False
        self._say(f"Set up walls for: {link_id}")
        self.process("board")
        return True

    def _knock_out(self, tokens: _Tokens) -> bool:
        link_id = self._link_argument(tokens)
        if link_id is None:
            return False
        if self._is_own(link_id):
            self._say("Knock out cannot be applied on your own links!")
            return False
        try:
            self.game.ability.knock_out(self.game.link(link_id))
        except InvalidLinkError as error:
            self._complain(str(error))
            return False
        self._say(f"Knock out applied on {link_id}!")
        return True


def main(argv: list[str] | None = None) -> int:
    """Set up a game from command-line options and play it on standard input."""
    args = list(sys.argv[1:] if argv is None else argv)
    ability1 = ability2 = DEFAULT_ABILITIES
    link1 = randomize_links()
    link2 = randomize_links()
    show_board = False

    index = 0
    while index < len(args):
        arg = args[index]
        has_value = index + 1 < len(args)
        if arg == "-ability1" and has_value:
            index += 1
            ability1 = args[index]
        elif arg == "-ability2" and has_value:
            index += 1
            ability2 = args[index]
        elif arg == "-link1" and has_value:
            index += 1
            link1 = read_links_from_file(args[index])
        elif arg == "-link2" and has_value:
            index += 1
            link2 = read_links_from_file(args[index])
        elif arg == "-graphics":
            show_board = True
        index += 1

    game = Game()
    game.initialize_links(link1, 1)
    game.initialize_links(link2, 2)
    _grant_abilities(game.player1, ability1)
    _grant_abilities(game.player2, ability2)

    processor = CommandProcessor(game, studio=Studio(game))
    if show_board:
        processor.process("board")
    print("Enter commands (type 'quit' to exit):")
    processor.run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())