"""Greedy AI for bot players."""

import logging
from typing import Iterable

from assimilation.board.board import Board
from assimilation.data.models import BotKind, ColorID, HumanKind, Player, PlayerID
from .capture import SelectionEvent, count_captures

logger = logging.getLogger(__name__)


def choose_color(board: Board, player: PlayerID, color_ids: Iterable[ColorID]) -> ColorID:
    """Pick the color with the highest capture count for `player`.

    Counts come from `count_captures`, so a tile touching the territory on
    several sides weighs more.

    Ties keep the lowest id. If nothing can be captured, the lowest id is
    returned anyway, which makes for a no-op move.
    """
    ids = sorted(color_ids)
    if len(ids) == 0:
        raise ValueError("No color ids to choose from.")
    best_score = 0
    best_move = ids[0]
    for cid in ids:
        score = count_captures(board, cid, player)
        if score > best_score:
            best_score = score
            best_move = cid
    logger.debug(f"Best color for player {player}: {best_move} ({best_score})")
    return best_move


def perform_ai_move(
    board: Board,
    head: Player | None,
    color_ids: Iterable[ColorID],
    waited_ticks: int = 0,
) -> SelectionEvent | None:
    """Make a selection for the current player, if it is a bot.

    Bots wait `delay_ticks` ticks at the head of the turn order before moving.
    """
    if head is None:
        return None
    match head.kind:
        case HumanKind():
            return None
        case BotKind(delay_ticks=delay) if waited_ticks < delay:
            return None
        case BotKind():
            logger.info(f"First player is a bot ({head.name}). Making a move")
            best = choose_color(board, head.id, color_ids)
            return SelectionEvent(color_id=best, player=head.id)
    raise TypeError(f"Unknown player kind: {head.kind!r}")
