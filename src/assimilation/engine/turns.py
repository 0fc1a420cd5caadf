"""Turn order."""

from assimilation.data.models import PlayerID


def rotate_turn(player_order: list[PlayerID]) -> list[PlayerID]:
    """Pass the turn: the current head moves to the tail.

    Players without legal moves are not skipped here.
    """
    if len(player_order) == 0:
        return []
    return player_order[1:] + player_order[:1]
