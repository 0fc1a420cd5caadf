"""Board and tile models."""

from collections import Counter
from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

from assimilation.data.models import ColorID, PlayerID
from .hexes import OffsetCoord


class EmptyState(BaseModel):
    """Hole in the board; never playable."""

    kind: Literal["empty"] = "empty"


class UnownedState(BaseModel):
    """Tile not yet captured, grouped by its color id."""

    kind: Literal["unowned"] = "unowned"
    color_id: Annotated[ColorID, Field(ge=0)]


class OwnedState(BaseModel):
    """Tile captured by a player."""

    kind: Literal["owned"] = "owned"
    player: PlayerID


TileState = Annotated[
    EmptyState | UnownedState | OwnedState, Field(discriminator="kind")
]


class Tile(BaseModel):
    """One board cell.

    The only allowed transition is Unowned -> Owned.
    """

    row: int
    column: int
    state: TileState

    @property
    def coord(self) -> OffsetCoord:
        """Coordinate of this tile."""
        return OffsetCoord(root=(self.row, self.column))

    @property
    def color_id(self) -> ColorID | None:
        """Color id, if the tile is unowned."""
        if isinstance(self.state, UnownedState):
            return self.state.color_id
        return None

    @property
    def owner(self) -> PlayerID | None:
        """Owning player, if any."""
        if isinstance(self.state, OwnedState):
            return self.state.player
        return None

    def is_owned_by(self, player: PlayerID) -> bool:
        """Check whether `player` owns this tile."""
        return self.owner == player

    def capture(self, player: PlayerID) -> None:
        """Claim this tile for `player`."""
        if not isinstance(self.state, UnownedState):
            raise ValueError(
                f"Tile ({self.row}, {self.column}) can't be captured "
                f"from state {self.state.kind!r}"
            )
        self.state = OwnedState(player=player)


class Board(BaseModel):
    """Collection of tiles, in load order (row-major)."""

    tiles: list[Tile] = []

    @model_validator(mode="after")
    def _chk_unique_coords(self) -> "Board":
        """Ensure no two tiles share a coordinate."""
        counts = Counter((t.row, t.column) for t in self.tiles)
        dupes = [rc for rc, n in counts.items() if n > 1]
        if dupes:
            raise ValueError(f"Duplicate tile coordinates: {dupes}")
        return self

    def __len__(self) -> int:
        return len(self.tiles)

    def get(self, row: int, column: int) -> Tile | None:
        """Get the tile at (row, column), if it exists."""
        for tile in self.tiles:
            if tile.row == row and tile.column == column:
                return tile
        return None

    def owned_by(self, player: PlayerID) -> set[OffsetCoord]:
        """Coordinates owned by a player."""
        return {t.coord for t in self.tiles if t.is_owned_by(player)}

    @property
    def unowned_count(self) -> int:
        """Number of tiles that can still be captured."""
        return sum(1 for t in self.tiles if isinstance(t.state, UnownedState))

    @property
    def shape(self) -> tuple[int, int]:
        """Number of rows and columns spanned by the tiles."""
        if len(self.tiles) == 0:
            return (0, 0)
        max_row = max(t.row for t in self.tiles)
        max_column = max(t.column for t in self.tiles)
        return (max_row + 1, max_column + 1)
