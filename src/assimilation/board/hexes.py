"""Offset hex grid definition."""

from pydantic import RootModel


class OffsetCoord(RootModel[tuple[int, int]]):
    """Hex coordinate definition, using (row, column) offset coordinates.

    Every other row is shifted by half a tile, so which cells are adjacent
    depends on the parity of the row.

    https://www.redblobgames.com/grids/hexagons/#coordinates-offset
    """

    model_config = {"frozen": True}

    root: tuple[int, int]

    @property
    def row(self) -> int:
        """Row index."""
        return self.root[0]

    @property
    def column(self) -> int:
        """Column index."""
        return self.root[1]

    # Used as set members for capture frontiers

    def __eq__(self, rhs: object) -> bool:
        if isinstance(rhs, OffsetCoord):
            return self.root == rhs.root
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.root)

    @property
    def neighbors(self) -> list["OffsetCoord"]:
        """Get direct neighbors of this cell (may lie outside any board)."""
        offsets = EVEN_ROW_OFFSETS if self.row % 2 == 0 else ODD_ROW_OFFSETS
        return [
            OffsetCoord(root=(self.row + dr, self.column + dc)) for (dr, dc) in offsets
        ]


def neighbor_offsets(row: int) -> list[tuple[int, int]]:
    """Get the (row, column) offsets of the 6 neighbors for a cell in `row`.

    Even rows drop the diagonal offsets with a column offset of -1,
    odd rows drop the ones with +1.
    """
    res: list[tuple[int, int]] = []
    for row_offset in (-1, 0, 1):
        for column_offset in (-1, 0, 1):
            if row_offset == 0 and column_offset == 0:
                continue
            if row % 2 == 0 and row_offset != 0 and column_offset == -1:
                continue
            if row % 2 != 0 and row_offset != 0 and column_offset == 1:
                continue
            res.append((row_offset, column_offset))
    return res


EVEN_ROW_OFFSETS = tuple(neighbor_offsets(0))
"""Neighbor offsets for cells on even rows."""

ODD_ROW_OFFSETS = tuple(neighbor_offsets(1))
"""Neighbor offsets for cells on odd rows."""
