"""The game board, turn order, movement, battles and downloads."""

from __future__ import annotations

from typing import TextIO

from raiinet.ability import Abilities
from raiinet.link import Link
from raiinet.player import Player

BOARD_SIZE = 8
NOT_FOUND = (-1, -1)

_STEPS = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}

_FIREWALL_MARKS = {1: "m", 2: "w"}


class InvalidLinkError(ValueError):
    """Raised when a link identifier names no link in the game."""


def _is_player1_link(cell: str) -> bool:
    return "a" <= cell <= "h"


def _is_player2_link(cell: str) -> bool:
    return "A" <= cell <= "H"


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Game:
    """An 8x8 board with two players, their links and the abilities in play.

    Messages about what happens are printed to ``out`` (standard output
    when it is ``None``). Moves that are not allowed raise ``ValueError``.
    """

    def __init__(self, out: TextIO | None = None) -> None:
        self.player1 = Player()
        self.player2 = Player()
        self.ability = Abilities()
        self.is_player1_turn = True
        self.firewall_board = [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.board = self._initial_board()
        self.out = out

    @staticmethod
    def _initial_board() -> list[list[str]]:
        board = [["."] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        board[0][3] = board[0][4] = "S"
        board[7][3] = board[7][4] = "S"
        for col, (low, high) in enumerate(zip("abcdefgh", "ABCDEFGH")):
            top_row, bottom_row = (1, 6) if col in (3, 4) else (0, 7)
            board[top_row][col] = low
            board[bottom_row][col] = high
        return board

    def _say(self, *parts: object) -> None:
        print(*parts, sep="", file=self.out)

    def _current(self) -> tuple[Player, int]:
        if self.is_player1_turn:
            return self.player1, 1
        return self.player2, 2

    def _opponent(self) -> tuple[Player, int]:
        if self.is_player1_turn:
            return self.player2, 2
        return self.player1, 1

    # ------------------------------------------------------------------ setup

    def initialize_links(self, links: list[str], player: int) -> None:
        """Create a player's links from tokens such as ``V1`` or ``D4``.

        Tokens are assigned to identifiers in order; unknown tokens use up
        an identifier without creating a link.
        """
        owner = self.player1 if player == 1 else self.player2
        letters = "abcdefgh" if player == 1 else "ABCDEFGH"
        for token, identifier in zip(links, letters):
            if len(token) == 2 and token[0] in "DV" and token[1] in "1234":
                owner.add_link(Link(token[0] == "D", int(token[1]), identifier))

    # ---------------------------------------------------------------- display

    def display_board(self) -> str:
        """Return the board with each player's summary, as seen by the current player."""
        separator = "=" * (BOARD_SIZE * 2 - 1) + "\n"
        parts = [self._player_summary(self.player1, 1), separator]
        for row in self.board:
            parts.append("".join(f"{cell} " for cell in row) + "\n")
        parts.append(separator)
        parts.append(self._player_summary(self.player2, 2))
        return "".join(parts)

    def _player_summary(self, player: Player, number: int) -> str:
        return (
            f"Player {number}: \n"
            f"Downloaded: {player.downloaded_data}D, {player.downloaded_viruses}V\n"
            f"Abilities: {player.ability_count()}\n"
            + player.display_links(self.is_player1_turn, number)
        )

    def is_game_over(self) -> bool:
        """Report and return whether someone has reached four downloads."""
        if self.player1.downloaded_data >= 4:
            self._say("Player 1 has downloaded 4 data!")
            self._say("Player 1 wins!")
            return True
        if self.player2.downloaded_data >= 4:
            self._say("Player 2 has downloaded 4 data!")
            self._say("Player 2 wins!")
            return True
        if self.player1.downloaded_viruses >= 4:
            self._say("Player 1 has downloaded 4 viruses!")
            self._say("Player 2 wins!")
            return True
        if self.player2.downloaded_viruses >= 4:
            self._say("Player 2 has downloaded 4 viruses!")
            self._say("Player 1 wins!")
            return True
        return False

    # ------------------------------------------------------------------ moves

    def process_move(self, link_id: str, direction: str) -> None:
        """Move one of the current player's links and pass the turn.

        Raises ``ValueError`` for a link of the other team or an illegal
        target square, and ``InvalidLinkError`` when the link is not on the
        board. A move blocked by walls is reported and leaves the turn as it is.
        """
        if (self.is_player1_turn and _is_player2_link(link_id)) or (
            not self.is_player1_turn and _is_player1_link(link_id)
        ):
            raise ValueError("Invalid: Players can only move units on their own team!")

        position = self.find_link_position(link_id)
        if position == NOT_FOUND:
            raise InvalidLinkError("Link not found!")
        x, y = position

        new_pos = self._new_position(x, y, direction, self.link(link_id))
        if new_pos is None or not self._is_valid_move(new_pos):
            raise ValueError("Invalid move!")
        nx, ny = new_pos
        target = self.board[nx][ny]

        if self.check_wall(link_id):
            self.board[x][y] = "."
            if not self._is_valid_wall(new_pos):
                self.board[x][y] = link_id
                self._say("Walls can't move in that position!")
                return
        elif target == "+":
            self._say("Sorry, A wall stops this move!")
            return

        self.board[x][y] = _FIREWALL_MARKS.get(self.firewall_board[x][y], ".")

        mover, number = self._current()
        opponent_mark = 2 if self.is_player1_turn else 1
        firewall_download = False

        if self.firewall_board[nx][ny] == opponent_mark:
            link = self.link(link_id)
            self.ability.firewall(mover, link)
            self._say(f"Firewall applied on {link_id}!")
            if link.is_data:
                self._say(f"Link revealed! {link_id} is a data!")
            else:
                self._say(f"Player {number} downloads a virus!")
                found = self.find_link_position(link_id)
                if self.check_wall(link_id):
                    self._clear_sides(x, y)
                    self.ability.remove_walls(link_id)
                if found != NOT_FOUND:
                    self.set_cell(found, ".")
                firewall_download = True

        is_enemy = _is_player2_link if self.is_player1_turn else _is_player1_link

        if firewall_download:
            pass
        elif is_enemy(target):
            self._battle(link_id, target, (x, y), new_pos)
        elif target == "S":
            opponent, opponent_number = self._opponent()
            self._handle_download(opponent, self.link(link_id), opponent_number)
            if self.check_wall(link_id):
                self._clear_sides(x, y)
                self.ability.remove_walls(link_id)
        else:
            self.board[nx][ny] = link_id
            if self.check_wall(link_id):
                if self._is_valid_wall(new_pos):
                    self._place_sides(nx, ny)
                    if direction in ("up", "down"):
                        self._clear_sides(x, y)
                    elif direction == "left":
                        self._clear_cell(x, y + 1)
                    elif direction == "right":
                        self._clear_cell(x, y - 1)
                else:
                    self._say("You have placed your walls out of bounds. You lose this ability")
                    self.ability.remove_walls(link_id)

        self._say("Move completed!")
        self._say("=" * 15)
        self._next_player()

    def _battle(
        self,
        link_id: str,
        target: str,
        old_pos: tuple[int, int],
        new_pos: tuple[int, int],
    ) -> None:
        x, y = old_pos
        nx, ny = new_pos
        attacker = self.link(link_id)
        defender = self.link(target)
        attacker.revealed = True
        defender.revealed = True
        if attacker.strength >= defender.strength:
            winner, loser = attacker, defender
        else:
            winner, loser = defender, attacker

        self.board[nx][ny] = winner.identifier
        if _is_player1_link(winner.identifier):
            self._handle_download(self.player1, loser, 1)
        else:
            self._handle_download(self.player2, loser, 2)

        if loser.identifier != winner.identifier and self.check_wall(loser.identifier):
            self._clear_sides(x, y)
            self.ability.remove_walls(link_id)
        elif self.check_wall(winner.identifier):
            if self._is_valid_wall(new_pos):
                self._place_sides(nx, ny)
                self._clear_sides(x, y)
            else:
                self._say("You have placed your walls out of bounds. You lose this ability")
                self.ability.remove_walls(winner.identifier)

    def _handle_download(self, player: Player, link: Link, number: int) -> None:
        kind = "data" if link.is_data else "virus"
        player.download_link(link)
        self._say(f"Player {number} downloads a {kind}!")

    def _new_position(
        self, x: int, y: int, direction: str, link: Link
    ) -> tuple[int, int] | None:
        step = _STEPS.get(direction)
        if step is None:
            return None
        return x + step[0] * link.jumps, y + step[1] * link.jumps

    def _is_valid_move(self, pos: tuple[int, int]) -> bool:
        row, col = pos
        if not _in_bounds(row, col):
            return False
        cell = self.board[row][col]
        if self.is_player1_turn:
            own_server_row, is_own = 0, _is_player1_link
        else:
            own_server_row, is_own = BOARD_SIZE - 1, _is_player2_link
        if row == own_server_row and col in (3, 4):
            return False
        return not is_own(cell)

    def _is_valid_wall(self, pos: tuple[int, int]) -> bool:
        row, col = pos
        left, right = col - 1, col + 1
        if left < 0 or right >= BOARD_SIZE:
            return False
        return self.board[row][left] == "." and self.board[row][right] == "."

    def _clear_cell(self, row: int, col: int) -> None:
        if _in_bounds(row, col):
            self.board[row][col] = "."

    def _clear_sides(self, row: int, col: int) -> None:
        self._clear_cell(row, col - 1)
        self._clear_cell(row, col + 1)

    def _place_sides(self, row: int, col: int) -> None:
        self.board[row][col - 1] = "+"
        self.board[row][col + 1] = "+"

    # ------------------------------------------------------------------ turns

    def _next_player(self) -> None:
        self.is_player1_turn = not self.is_player1_turn
        player, _ = self._current()
        player.ability_available = True
        for link in player.links:
            if link.knocked_out:
                self._examine_knocked_out(link, self.find_link_position(link.identifier))
                if not link.knocked_out:
                    self._say()
                    self._say(f"{link.identifier} is freed from knock out! It can move again!")
                    self._say()

    def _examine_knocked_out(self, link: Link, pos: tuple[int, int]) -> None:
        if pos == NOT_FOUND:
            return
        is_teammate = _is_player1_link if self.is_player1_turn else _is_player2_link
        row, col = pos
        for d_row, d_col in _STEPS.values():
            r, c = row + d_row, col + d_col
            if _in_bounds(r, c) and is_teammate(self.board[r][c]):
                link.knocked_out = False

    # ------------------------------------------------------------ board access

    def link(self, link_id: str) -> Link:
        """Return the link with this identifier from either player."""
        for link in (*self.player1.links, *self.player2.links):
            if link.identifier == link_id:
                return link
        raise InvalidLinkError("Invalid link ID")

    def state(self, row: int, col: int) -> str:
        """Return the cell's character, or '.' outside the board."""
        if _in_bounds(row, col):
            return self.board[row][col]
        return "."

    def find_link_position(self, link_id: str) -> tuple[int, int]:
        """Return the (row, col) of the first cell holding ``link_id``, or ``NOT_FOUND``."""
        for row, cells in enumerate(self.board):
            for col, cell in enumerate(cells):
                if cell == link_id:
                    return row, col
        return NOT_FOUND

    def set_cell(self, pos: tuple[int, int], char: str) -> None:
        row, col = pos
        if not _in_bounds(row, col):
            raise IndexError(f"cell {pos} is outside the board")
        self.board[row][col] = char

    def set_walls(self, link_id: str, x: int, y1: int, y2: int) -> bool:
        """Place walls at (x, y1) and (x, y2) if both are empty board cells."""
        if not (_in_bounds(x, y1) and _in_bounds(x, y2)):
            return False
        if self.board[x][y1] != "." or self.board[x][y2] != ".":
            return False
        self.set_cell((x, y1), "+")
        self.set_cell((x, y2), "+")
        return True

    def check_wall(self, link_id: str) -> bool:
        """True if the link currently carries walls."""
        return self.ability.has_walls(link_id)