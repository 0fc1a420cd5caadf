import logging

import pytest

from assimilation.board.board import EmptyState, OwnedState, UnownedState
from assimilation.board.levels import (
    LevelError,
    LevelLibrary,
    board_from_text,
    parse_level,
)

BASIC = """
- 1 | | | 2 -
- | | | | | -
"""

PLAYERS = [10, 20]
COLORS = [0, 1, 2]


def test_load_level_basic():
    tiles = parse_level(BASIC, PLAYERS, COLORS, seed=0)
    assert len(tiles) == 14

    by_rc = {(t.row, t.column): t for t in tiles}
    assert by_rc[0, 1].state == OwnedState(player=10)
    assert by_rc[0, 5].state == OwnedState(player=20)
    assert sum(isinstance(t.state, EmptyState) for t in tiles) == 4

    unowned = [t for t in tiles if isinstance(t.state, UnownedState)]
    assert len(unowned) == 8
    assert all(t.color_id in COLORS for t in unowned)


def test_indices_follow_token_positions():
    tiles = parse_level("1  -\n\t| |  |", [1], [5], seed=1)
    assert [(t.row, t.column) for t in tiles] == [(0, 0), (0, 1), (1, 0), (1, 1), (1, 2)]
    assert all(t.color_id == 5 for t in tiles[2:])


def test_same_seed_same_colors():
    first = parse_level(BASIC, PLAYERS, COLORS, seed=42)
    again = parse_level(BASIC, PLAYERS, list(reversed(COLORS)), seed=42)
    assert [t.state for t in first] == [t.state for t in again]


@pytest.mark.parametrize(
    "text, token, column",
    [
        ("1 | 0", "0", 2),
        ("1 | 3", "3", 2),
        ("1 x |", "x", 1),
        ("1 | -2", "-2", 2),
        ("1 | 1.5", "1.5", 2),
    ],
)
def test_bad_tokens(text: str, token: str, column: int):
    with pytest.raises(LevelError) as exc_info:
        parse_level(text, PLAYERS, COLORS)
    err = exc_info.value
    assert err.token == token
    assert err.row == 0
    assert err.column == column


def test_unowned_needs_colors():
    with pytest.raises(LevelError):
        parse_level("1 |", PLAYERS, [])


def test_empty_level():
    with pytest.raises(LevelError):
        parse_level("\n   \n", PLAYERS, COLORS)


def test_level_error_is_value_error():
    with pytest.raises(ValueError):
        parse_level("?", PLAYERS, COLORS)


def test_board_from_text():
    board = board_from_text(BASIC, PLAYERS, COLORS, seed=3)
    assert board.shape == (2, 7)
    assert board.unowned_count == 8


@pytest.mark.parametrize("name, n_tiles", [("square", 100), ("hexagon", 169)])
def test_presets(name: str, n_tiles: int):
    preset = LevelLibrary().load_level(name)
    assert preset.name == name
    assert preset.players == 2
    board = board_from_text(preset.text, [1, 2], COLORS, seed=0)
    assert len(board) == n_tiles
    assert len(board.owned_by(1)) == 1
    assert len(board.owned_by(2)) == 1


def test_available_levels():
    assert {"square", "hexagon"} <= set(LevelLibrary().level_names)


def test_missing_preset():
    with pytest.raises(ValueError):
        LevelLibrary().load_level("nope")


def test_unreadable_preset_is_skipped(tmp_path, caplog):
    (tmp_path / "good.yaml").write_text("name: good\ntext: '1 | |'\n")
    (tmp_path / "bad.yaml").write_text("title: no text here\n")
    lib = LevelLibrary(path_levels=tmp_path)
    with caplog.at_level(logging.WARNING):
        names = lib.level_names
    assert names == ["good"]
    assert "bad.yaml" in caplog.text
