# raiinet

A two-player strategy game played on an 8x8 board in the terminal. Each
player controls eight links, each either data or a virus with a strength
of 1 to 4.

A player wins by downloading four data. A player who downloads four
viruses loses.

## Installing

    pip install .

## Playing

Start a game with randomly shuffled links and the default abilities
(Link Boost, Firewall, Download, Scan, Polarize):

    raiinet

Commands are then read from standard input. The session ends on `quit`,
at the end of the input, or when the game is over.

Options:

- `-ability1 LETTERS` / `-ability2 LETTERS`: the abilities for player 1 or
  player 2, given as a string of letters. `L` is Link Boost, `F` Firewall,
  `D` Download, `S` Scan, `P` Polarize, `C` Craze, `E` Exchange, `K` Knock
  Out and `W` Walls. A player holds at most two of each ability.
- `-link1 FILE` / `-link2 FILE`: read a player's links from a file of
  whitespace-separated entries such as `V1 D4 V3 V2 D3 V4 D2 D1`. The
  entries go to the links in order. If the file cannot be opened, the
  default order `V1 D4 V3 V2 D3 V4 D2 D1` is used.
- `-graphics`: print the board once before the first prompt.

Player 1 controls links `a`–`h`, which start at the top of the board.
Player 2 controls links `A`–`H`, which start at the bottom. Server ports are
marked `S`. Firewalls show as `m` (player 1) or `w` (player 2), and walls
show as `+`.

## Commands

- `move <link> <up|down|left|right>`: move one of your links. A successful
  move ends your turn and prints the board.
- `abilities`: list your abilities in alphabetical order, with how many
  uses are left.
- `ability <id> ...`: use an ability. Its arguments are one link, two links
  (Exchange), or a row and a column (Firewall). The IDs are fixed when the
  game starts. They number the abilities you hold in alphabetical order of
  their letters.
- `board`: show the board and both players' summaries. Links of the
  opponent that have not been revealed show as `?`.
- `sequence <file>`: run the commands in a file, one per line.
- `quit`: leave the game.

You may use one ability per turn. If an ability cannot be applied, for
example to a link of your own where that is not allowed, its use is given
back.

## Using it as a library

    from raiinet.cli import CommandProcessor
    from raiinet.game import Game

    game = Game()
    game.initialize_links(["V1", "D4", "V3", "V2", "D3", "V4", "D2", "D1"], 1)
    game.initialize_links(["D1", "D2", "V4", "D3", "V2", "V3", "D4", "V1"], 2)
    game.player1.abilities.update({"L": 1, "S": 1})
    game.player2.abilities.update({"F": 1, "D": 1})

    processor = CommandProcessor(game)
    processor.process("move d down")
    print(game.display_board())

Grant the abilities before you create the `CommandProcessor`. It works out
the ability IDs when it is created.

`Game.process_move` raises `ValueError` for an illegal move. It raises
`InvalidLinkError` for a link that is not on the board. `CommandProcessor`
reports these on standard error and keeps going. The `quit` command raises
`QuitGame` from `CommandProcessor.process`.

## What it does not do

There is no graphical window. The game is played entirely as text in the
terminal. `Studio` and `Observer` let you attach your own board views, which
are notified each time the board is shown. The package does not ship any
such view, and `-graphics` only prints the board.