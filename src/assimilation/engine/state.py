"""Game state shared with the outside."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from assimilation.data.models import ColorID, ColorLabel, PlayerID


class SetupPhase(BaseModel):
    """Match configured, board not loaded yet."""

    kind: Literal["setup"] = "setup"


class RunningPhase(BaseModel):
    """Match in progress."""

    kind: Literal["running"] = "running"


class OverPhase(BaseModel):
    """Match finished. Terminal."""

    kind: Literal["over"] = "over"
    winner: PlayerID


GamePhase = Annotated[
    SetupPhase | RunningPhase | OverPhase, Field(discriminator="kind")
]

_PHASE_RANK = {"setup": 0, "running": 1, "over": 2}


class GameState(BaseModel):
    """Turn order, phase and available colors.

    The head of `player_order` is always the current player.
    """

    player_order: list[PlayerID] = []
    phase: GamePhase = SetupPhase()
    color_ids: dict[ColorID, ColorLabel] = {}

    @property
    def current_player(self) -> PlayerID | None:
        """Player whose turn it is."""
        if len(self.player_order) == 0:
            return None
        return self.player_order[0]

    @property
    def is_running(self) -> bool:
        """Whether selections are accepted."""
        return isinstance(self.phase, RunningPhase)

    @property
    def is_over(self) -> bool:
        """Whether the match has ended."""
        return isinstance(self.phase, OverPhase)

    @property
    def winner(self) -> PlayerID | None:
        """Winner, once the match is over."""
        if isinstance(self.phase, OverPhase):
            return self.phase.winner
        return None

    def advance_phase(self, phase: SetupPhase | RunningPhase | OverPhase) -> None:
        """Move to the next phase: setup, running, then over (final)."""
        if _PHASE_RANK[phase.kind] != _PHASE_RANK[self.phase.kind] + 1:
            raise ValueError(
                f"Can't change phase from {self.phase.kind!r} to {phase.kind!r}"
            )
        self.phase = phase
