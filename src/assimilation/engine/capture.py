"""Flood-fill capture of same-colored regions."""

import logging
from typing import Callable

from pydantic import BaseModel

from assimilation.board.board import Board, Tile, UnownedState
from assimilation.data.models import ColorID, PlayerID

logger = logging.getLogger(__name__)

CaptureCallback = Callable[[Tile], None]


class SelectionEvent(BaseModel):
    """Request by a player to capture a color."""

    model_config = {"frozen": True}

    color_id: ColorID
    player: PlayerID


class CaptureEvent(BaseModel):
    """Notification that a single tile was captured."""

    model_config = {"frozen": True}

    row: int
    column: int
    player: PlayerID


def _no_effect(tile: Tile) -> None:
    """Callback that leaves the board alone."""


def for_each_selected_tile(
    board: Board,
    color_id: ColorID,
    player: PlayerID,
    callback: CaptureCallback = _no_effect,
) -> int:
    """Call `callback` for every tile that selecting `color_id` would capture.

    The frontier starts as the player's territory. Each pass goes over all
    tiles in board order, and over each tile's neighbors; whenever a neighbor
    is in the frontier and the tile is still unowned with the selected color,
    the tile joins the frontier and is passed to `callback`. Passes repeat
    until one adds nothing; every productive pass claims a tile, so the
    search finishes within `len(board)` passes.

    The board is not changed here; the callback decides what a capture does.
    If it leaves the tile unowned (count-only mode), the tile is reported
    once per frontier neighbor, so the returned count weighs how strongly a
    color touches the territory. A mutating callback sees each tile once.
    """
    frontier = board.owned_by(player)
    # Neighbor lists don't change between passes
    cells = [(tile, tile.coord) for tile in board.tiles]
    adjacent = {coord: coord.neighbors for (_, coord) in cells}
    n_captured = 0
    n_passes = 0

    while True:
        did_capture = False
        n_passes += 1
        for tile, coord in cells:
            if coord in frontier:
                continue
            for nb in adjacent[coord]:
                if nb not in frontier:
                    continue
                state = tile.state
                if isinstance(state, UnownedState) and state.color_id == color_id:
                    frontier.add(coord)
                    did_capture = True
                    n_captured += 1
                    callback(tile)
        if not did_capture:
            break

    logger.debug(
        f"Color {color_id} for player {player}: {n_captured} captures in {n_passes} passes"
    )
    return n_captured


def count_captures(board: Board, color_id: ColorID, player: PlayerID) -> int:
    """Score a selection without changing the board.

    Zero exactly when the selection would capture nothing. Otherwise tiles
    touching several frontier cells count once per such cell.
    """
    return for_each_selected_tile(board, color_id, player)


def preview_captures(
    board: Board, color_id: ColorID, player: PlayerID
) -> list[tuple[int, int]]:
    """Coordinates a selection would capture, in capture order, each once."""
    res: dict[tuple[int, int], None] = {}
    for_each_selected_tile(
        board, color_id, player, lambda tile: res.setdefault((tile.row, tile.column))
    )
    return list(res)


def resolve_selection(board: Board, selection: SelectionEvent) -> list[CaptureEvent]:
    """Apply a selection to the board.

    Every captured tile becomes owned by the acting player. Returns one
    capture event per tile, in the order they were captured.
    """
    events: list[CaptureEvent] = []

    def _capture(tile: Tile) -> None:
        tile.capture(selection.player)
        logger.debug(f"  capture of tile at {tile.row},{tile.column}")
        events.append(
            CaptureEvent(row=tile.row, column=tile.column, player=selection.player)
        )

    for_each_selected_tile(board, selection.color_id, selection.player, _capture)
    logger.info(
        f"Player {selection.player} selected color {selection.color_id}: "
        f"captured {len(events)} tiles"
    )
    return events
