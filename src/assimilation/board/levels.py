"""Level text grammar and named level presets."""

import logging
import re
from pathlib import Path
from random import Random
from typing import Annotated, Sequence

from pydantic import BaseModel, Field
from pydantic_yaml import parse_yaml_file_as

from assimilation.data import levels_path
from assimilation.data.models import ColorID, PlayerID
from .board import Board, EmptyState, OwnedState, Tile, TileState, UnownedState

logger = logging.getLogger(__name__)

EMPTY_TOKEN = "-"
UNOWNED_TOKEN = "|"
PLAYER_TOKEN_REGEX = r"^\d+$"


class LevelError(ValueError):
    """Malformed level text.

    Carries the location of the offending token, when there is one.
    """

    def __init__(
        self,
        msg: str,
        *,
        row: int | None = None,
        column: int | None = None,
        token: str | None = None,
    ) -> None:
        if row is not None:
            msg = f"{msg} (at row {row}, column {column})"
        super().__init__(msg)
        self.row = row
        self.column = column
        self.token = token


class LevelPreset(BaseModel):
    """A named level, as stored in YAML."""

    name: str
    players: Annotated[int, Field(ge=1)] = 2
    text: str


def _parse_token(
    token: str,
    row: int,
    column: int,
    players: Sequence[PlayerID],
    color_ids: Sequence[ColorID],
    rng: Random,
) -> TileState:
    """Convert a single level token to a tile state."""
    if token == EMPTY_TOKEN:
        return EmptyState()
    if token == UNOWNED_TOKEN:
        if len(color_ids) == 0:
            raise LevelError(
                "No color ids to draw from", row=row, column=column, token=token
            )
        return UnownedState(color_id=rng.choice(color_ids))
    if not re.match(PLAYER_TOKEN_REGEX, token):
        raise LevelError(
            f"Unexpected value in level: {token!r}", row=row, column=column, token=token
        )
    player_num = int(token)
    if player_num == 0 or player_num > len(players):
        raise LevelError(
            f"Invalid player number in level: {player_num} (max {len(players)})",
            row=row,
            column=column,
            token=token,
        )
    return OwnedState(player=players[player_num - 1])


def parse_level(
    text: str,
    players: Sequence[PlayerID],
    color_ids: Sequence[ColorID],
    *,
    seed: Random | int | None = None,
) -> list[Tile]:
    """Parse level text into tiles.

    Rows are lines and columns are whitespace-separated tokens:

    - `-` is an empty cell,
    - `|` is an unowned tile with a random color id from `color_ids`,
    - `N` (positive integer) is a tile owned by the N-th player (1-indexed).

    Colors are drawn once, here; passing the same seed gives the same board.
    """
    if isinstance(seed, Random):
        rng = seed
    else:
        rng = Random(seed)
    # Draw in a stable order, regardless of how ids were passed
    ids = sorted(color_ids)

    tiles: list[Tile] = []
    for row, line in enumerate(text.strip().splitlines()):
        for column, token in enumerate(line.split()):
            state = _parse_token(token, row, column, players, ids, rng)
            tiles.append(Tile(row=row, column=column, state=state))

    if len(tiles) == 0:
        raise LevelError("Level has no tiles.")
    return tiles


def board_from_text(
    text: str,
    players: Sequence[PlayerID],
    color_ids: Sequence[ColorID],
    *,
    seed: Random | int | None = None,
) -> Board:
    """Parse level text into a board."""
    board = Board(tiles=parse_level(text, players, color_ids, seed=seed))
    n_rows, n_columns = board.shape
    logger.info(
        f"Loaded board with {len(board)} tiles ({n_rows}x{n_columns}), "
        f"{board.unowned_count} unowned"
    )
    return board


class LevelLibrary(BaseModel):
    """Access to the level presets shipped as YAML."""

    path_levels: Path = levels_path

    def load_available_levels(self) -> list[LevelPreset]:
        """Load all available presets, skipping unreadable files."""
        res: list[LevelPreset] = []
        for yml_path in sorted(self.path_levels.rglob("*.yaml")):
            try:
                res.append(parse_yaml_file_as(LevelPreset, yml_path))
            except Exception:
                logger.warning(f"Failed to load file as level: {yml_path!s}")
        return res

    @property
    def level_names(self) -> list[str]:
        """Names of the available presets."""
        return [lvl.name for lvl in self.load_available_levels()]

    def load_level(self, name: str) -> LevelPreset:
        """Load a preset with a given name."""
        path = self.path_levels / f"{name}.yaml"
        if not path.is_file():
            raise ValueError(f"No level exists with name: {name!r}")
        return parse_yaml_file_as(LevelPreset, path)
