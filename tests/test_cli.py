import io
import random

import pytest

from raiinet.cli import (
    DEFAULT_ABILITIES,
    DEFAULT_LINKS,
    CommandProcessor,
    QuitGame,
    is_valid_link_id,
    main,
    randomize_links,
    read_links_from_file,
)
from raiinet.game import Game


def make(abilities=DEFAULT_ABILITIES):
    out = io.StringIO()
    err = io.StringIO()
    game = Game(out=out)
    game.initialize_links(list(DEFAULT_LINKS), 1)
    game.initialize_links(list(DEFAULT_LINKS), 2)
    for player in (game.player1, game.player2):
        player.abilities = {c: 1 for c in abilities}
    processor = CommandProcessor(game, out=out, err=err)
    return processor, game, out, err


@pytest.mark.parametrize(
    "link_id, expected",
    [("a", True), ("h", True), ("A", True), ("H", True), ("i", False), ("Z", False), (".", False), (None, False)],
)
def test_is_valid_link_id(link_id, expected):
    assert is_valid_link_id(link_id) is expected


def test_randomize_links_is_permutation():
    links = randomize_links(random.Random(3))
    assert sorted(links) == sorted(DEFAULT_LINKS)


def test_read_links_from_file(tmp_path):
    path = tmp_path / "links.txt"
    path.write_text("D1 D2 D3\nD4 V1 V2 V3 V4\n")
    assert read_links_from_file(str(path)) == ["D1", "D2", "D3", "D4", "V1", "V2", "V3", "V4"]


def test_read_links_missing_file_falls_back(tmp_path):
    assert read_links_from_file(str(tmp_path / "none.txt")) == list(DEFAULT_LINKS)


def test_move_changes_board_and_turn():
    processor, game, out, _ = make()
    processor.process("move a down")
    assert game.state(1, 0) == "a"
    assert game.state(0, 0) == "."
    assert game.is_player1_turn is False
    assert "Move completed!" in out.getvalue()


def test_move_other_team_rejected():
    processor, game, _, err = make()
    processor.process("move A up")
    assert "own team" in err.getvalue()
    assert game.is_player1_turn is True
    assert game.state(7, 0) == "A"


def test_move_invalid_link_selection():
    processor, game, _, err = make()
    processor.process("move z down")
    assert "Invalid link selection!" in err.getvalue()
    assert game.is_player1_turn is True


def test_abilities_listing():
    processor, _, out, _ = make()
    processor.process("abilities")
    lines = [line for line in out.getvalue().splitlines() if line.startswith("Ability ID")]
    assert lines[0] == "Ability ID: 1, Ability: Download, Available: 1"
    assert len(lines) == 5


def test_link_boost_once_per_round():
    processor, game, out, _ = make()
    processor.process("ability 3 a")
    assert game.link("a").jumps == 2
    assert game.player1.ability_available is False
    assert game.player1.abilities["L"] == 0
    processor.process("ability 4 a")
    assert "You may only use an ability once per round!" in out.getvalue()
    assert game.player1.abilities["P"] == 1


def test_unknown_ability_id():
    processor, game, out, _ = make()
    processor.process("ability 9 a")
    assert "You can no longer use this ability!" in out.getvalue()
    assert game.player1.ability_count() == 5


def test_ability_bad_format():
    processor, _, _, err = make()
    processor.process("ability x")
    assert "Error: Invalid ability command format." in err.getvalue()


def test_firewall_placed():
    processor, game, _, _ = make()
    processor.process("ability 2 3 3")
    assert game.state(3, 3) == "m"
    assert game.firewall_board[3][3] == 1
    assert game.player1.abilities["F"] == 0


def test_firewall_on_occupied_square_restores_use():
    processor, game, _, err = make()
    processor.process("ability 2 0 0")
    assert "Firewall should be set in an empty block!" in err.getvalue()
    assert game.player1.abilities["F"] == 1
    assert game.player1.ability_available is True


def test_scan_own_link_is_refunded():
    processor, game, out, _ = make()
    processor.process("ability 5 a")
    assert "Information unrevealed" in out.getvalue()
    assert game.player1.abilities["S"] == 1
    assert game.link("a").revealed is False


def test_scan_enemy_link():
    processor, game, out, _ = make()
    processor.process("ability 5 A")
    assert game.link("A").revealed is True
    assert "Type: Virus" in out.getvalue()
    assert "Strength: 1" in out.getvalue()


def test_download_enemy_link():
    processor, game, _, _ = make()
    processor.process("ability 1 A")
    assert game.player1.downloaded_viruses == 1
    assert game.state(7, 0) == "."


def test_download_own_link_refused():
    processor, game, out, _ = make()
    processor.process("ability 1 a")
    assert "Download cannot be applied on your own links!" in out.getvalue()
    assert game.player1.downloaded_viruses == 0
    assert game.player1.abilities["D"] == 1


def test_exchange_swaps_links():
    processor, game, _, _ = make("E")
    processor.process("ability 1 a b")
    first, second = game.link("a"), game.link("b")
    assert (first.is_data, first.strength) == (True, 4)
    assert (second.is_data, second.strength) == (False, 1)


def test_knock_out_blocks_move():
    processor, game, out, _ = make("K")
    processor.process("ability 1 A")
    assert game.link("A").knocked_out is True
    game.is_player1_turn = False
    processor.process("move A up")
    assert "knocked out" in out.getvalue()
    assert game.state(7, 0) == "A"


def test_walls_success_and_failure():
    processor, game, out, _ = make("W")
    processor.process("ability 1 a")
    assert "Could not set up walls for: a" in out.getvalue()
    assert game.player1.abilities["W"] == 1
    game.set_cell((0, 1), ".")
    game.set_cell((3, 3), "b")
    processor.process("ability 1 b")
    assert game.state(3, 2) == "+"
    assert game.state(3, 4) == "+"
    assert game.check_wall("b") is True


def test_quit_raises():
    processor, _, out, _ = make()
    with pytest.raises(QuitGame):
        processor.process("quit")
    assert "Quitting the game." in out.getvalue()


def test_unknown_command():
    processor, _, _, err = make()
    processor.process("dance")
    assert "Error: Unknown command." in err.getvalue()


def test_sequence_runs_file(tmp_path):
    processor, game, _, _ = make()
    path = tmp_path / "seq.txt"
    path.write_text("move a down\nmove A up\n")
    processor.process(f"sequence {path}")
    assert game.state(1, 0) == "a"
    assert game.state(6, 0) == "A"
    assert game.is_player1_turn is True


def test_sequence_missing_file(tmp_path):
    processor, _, _, err = make()
    processor.process(f"sequence {tmp_path / 'missing.txt'}")
    assert "Unable to open file" in err.getvalue()


def test_run_stops_on_quit():
    processor, game, out, _ = make()
    processor.run(io.StringIO("move a down\nquit\nmove A up\n"))
    assert game.state(1, 0) == "a"
    assert game.state(7, 0) == "A"
    assert "Quitting the game." in out.getvalue()


def test_run_stops_at_end_of_input():
    processor, game, _, _ = make()
    processor.run(io.StringIO("move a down\n"))
    assert game.is_player1_turn is False


def test_main_caps_abilities_and_reads_links(tmp_path, monkeypatch, capsys):
    path = tmp_path / "links.txt"
    path.write_text("D1 D2 D3 D4 V1 V2 V3 V4")
    monkeypatch.setattr("sys.stdin", io.StringIO("abilities\nboard\nquit\n"))
    assert main(["-link1", str(path), "-ability1", "KKKW"]) == 0
    output = capsys.readouterr().out
    assert "Enter commands (type 'quit' to exit):" in output
    assert "Ability: Knock Out, Available: 2" in output
    assert "a: D1" in output
    assert "Quitting the game." in output