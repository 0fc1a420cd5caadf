"""Shared fixtures."""

import pytest

from assimilation.board.board import Board, EmptyState, OwnedState, Tile, UnownedState
from assimilation.data import base_game
from assimilation.data.models import Player
from assimilation.engine.match import Match, MatchConfig


def make_board(*rows: str) -> Board:
    """Build a board from rows of `-` (empty), `cN` (color N) and `pN` (player N)."""
    tiles: list[Tile] = []
    for row, line in enumerate(rows):
        for column, token in enumerate(line.split()):
            if token == "-":
                state = EmptyState()
            elif token.startswith("c"):
                state = UnownedState(color_id=int(token[1:]))
            elif token.startswith("p"):
                state = OwnedState(player=int(token[1:]))
            else:
                raise ValueError(f"Bad test token: {token!r}")
            tiles.append(Tile(row=row, column=column, state=state))
    return Board(tiles=tiles)


@pytest.fixture
def grid():
    return make_board


@pytest.fixture
def human() -> Player:
    return base_game.make_human(1)


@pytest.fixture
def bot() -> Player:
    return base_game.make_bot(2)


@pytest.fixture
def match_on():
    """Start a match, then swap in a hand-made board."""

    def _make(players: list[Player], *rows: str, **config) -> Match:
        level = " ".join(str(i + 1) for i in range(len(players)))
        match = Match(players, config=MatchConfig(level_text=level, **config))
        match.start()
        match.board = make_board(*rows)
        return match

    return _make
