"""Scores and game-over detection."""

import logging
from typing import Collection, Iterable

from pydantic import BaseModel

from assimilation.board.board import Board, OwnedState
from assimilation.data.models import ColorID, PlayerID
from .capture import count_captures

logger = logging.getLogger(__name__)


class Evaluation(BaseModel):
    """Result of scoring the board.

    If `stuck` is set, the match is over: `bonus` unowned tiles were credited
    to `bonus_to`, and `winner` has the highest final score.
    """

    scores: dict[PlayerID, int]
    stuck: PlayerID | None = None
    bonus: int = 0
    bonus_to: PlayerID | None = None
    winner: PlayerID | None = None

    @property
    def is_over(self) -> bool:
        """Whether the match ended with this evaluation."""
        return self.stuck is not None


def compute_scores(board: Board, players: Iterable[PlayerID]) -> dict[PlayerID, int]:
    """Count the tiles each player owns, from scratch.

    Tiles owned by unknown players are skipped.
    """
    scores = {pid: 0 for pid in players}
    for tile in board.tiles:
        if not isinstance(tile.state, OwnedState):
            continue
        owner = tile.state.player
        if owner not in scores:
            logger.warning(
                f"Tile ({tile.row}, {tile.column}) owned by unknown player {owner}"
            )
            continue
        scores[owner] += 1
    return scores


def has_legal_move(
    board: Board, player: PlayerID, color_ids: Iterable[ColorID]
) -> bool:
    """Check whether any color would capture at least one tile for `player`."""
    return any(count_captures(board, cid, player) > 0 for cid in color_ids)


def find_stuck_player(
    board: Board, players: Iterable[PlayerID], color_ids: Collection[ColorID]
) -> PlayerID | None:
    """Get the first player without a legal move."""
    for pid in players:
        if not has_legal_move(board, pid, color_ids):
            return pid
    return None


def pick_winner(
    scores: dict[PlayerID, int], players: Iterable[PlayerID]
) -> PlayerID | None:
    """Player with the highest score; ties go to the first one in `players`."""
    winner: PlayerID | None = None
    best = -1
    for pid in players:
        score = scores.get(pid, 0)
        if score > best:
            best = score
            winner = pid
    return winner


def evaluate(
    board: Board, seating: list[PlayerID], color_ids: Collection[ColorID]
) -> Evaluation:
    """Recompute scores and check whether the match is over.

    Players are scanned in seating order (the order they joined the match),
    not the current turn order. The match ends as soon as some player is
    stuck. All remaining unowned tiles then go, as one lump bonus, to the
    first other seated player.
    """
    scores = compute_scores(board, seating)
    stuck = find_stuck_player(board, seating, color_ids)
    if stuck is None:
        return Evaluation(scores=scores)

    bonus = board.unowned_count
    bonus_to = next((pid for pid in seating if pid != stuck), None)
    if bonus_to is not None:
        scores[bonus_to] += bonus
    else:
        bonus = 0

    winner = pick_winner(scores, seating)
    logger.info(
        f"Player {stuck} has no moves left; {bonus} remaining tiles "
        f"go to player {bonus_to}. Winner: {winner}"
    )
    return Evaluation(
        scores=scores, stuck=stuck, bonus=bonus, bonus_to=bonus_to, winner=winner
    )
