"""A single match: board, players and the per-tick pipeline."""

import logging
from collections import deque
from typing import Annotated

from pydantic import BaseModel, Field

from assimilation.board.board import Board, UnownedState
from assimilation.board.levels import LevelError, LevelLibrary, board_from_text
from assimilation.data import base_game
from assimilation.data.models import ColorID, GameInfo, Player, PlayerID
from .ai import perform_ai_move
from .capture import CaptureEvent, SelectionEvent, preview_captures, resolve_selection
from .scoring import evaluate
from .state import GamePhase, GameState, OverPhase, RunningPhase
from .turns import rotate_turn

logger = logging.getLogger(__name__)


class SelectionError(ValueError):
    """Selection that can't be accepted right now."""


class MatchConfig(BaseModel):
    """Settings chosen before a match starts."""

    level_name: str = "hexagon"
    level_text: Annotated[
        str | None, Field(description="Custom level text, overrides level_name.")
    ] = None
    num_colors: Annotated[int, Field(ge=2, le=6)] = 5
    seed: int | None = None


class TickResult(BaseModel):
    """What happened during one tick."""

    tick: int
    resolved: list[SelectionEvent] = []
    captures: list[CaptureEvent] = []
    scores: dict[PlayerID, int] = {}
    phase: GamePhase


class Match:
    """Owns the board and game state of one match.

    Outside layers read through `view()`/`board` and act only via `submit()`.
    Each `tick()` runs, in order: resolve queued selections (rotating the turn
    after each), recompute scores and check for game over, then queue the
    AI's selection if the new current player is a bot.
    """

    def __init__(
        self,
        players: list[Player],
        config: MatchConfig = MatchConfig(),
        game_info: GameInfo = base_game,
        library: LevelLibrary = LevelLibrary(),
    ):
        if len(players) == 0:
            raise ValueError("A match needs at least one player.")
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate player ids: {ids}")

        self.config = config
        self.game_info = game_info
        self.library = library
        self.players: dict[PlayerID, Player] = {p.id: p for p in players}
        self.board = Board()
        self.state = GameState(player_order=ids)
        self.n_ticks = 0
        self._pending: deque[SelectionEvent] = deque()
        self._head_ticks = 0

    # Setup

    def _level_text(self) -> str:
        """Get the level text to load."""
        if self.config.level_text is not None:
            return self.config.level_text
        preset = self.library.load_level(self.config.level_name)
        if preset.players != len(self.players):
            raise LevelError(
                f"Level {preset.name!r} is made for {preset.players} players, "
                f"got {len(self.players)}"
            )
        return preset.text

    def start(self) -> None:
        """Load the level and start the match.

        On a bad level this raises, and the match stays in setup.
        """
        if self.state.is_running or self.state.is_over:
            raise RuntimeError("Match was already started.")
        color_ids = self.game_info.select_colors(self.config.num_colors)
        board = board_from_text(
            self._level_text(),
            self.state.player_order,
            list(color_ids),
            seed=self.config.seed,
        )
        self.board = board
        self.state.color_ids = color_ids
        self.state.advance_phase(RunningPhase())
        for p in self.players.values():
            p.score = len(board.owned_by(p.id))
        logger.info(
            f"Match started with {len(self.players)} players "
            f"and {len(color_ids)} colors"
        )

    # Read access

    def view(self) -> GameState:
        """Copy of the game state, for outside layers."""
        return self.state.model_copy(deep=True)

    @property
    def current_player(self) -> Player | None:
        """Player whose turn it is, if still registered."""
        pid = self.state.current_player
        if pid is None:
            return None
        return self.players.get(pid)

    @property
    def scores(self) -> dict[PlayerID, int]:
        """Latest scores."""
        return {pid: p.score for pid, p in self.players.items()}

    @property
    def pending(self) -> list[SelectionEvent]:
        """Selections waiting for the next tick."""
        return list(self._pending)

    def preview(
        self, color_id: ColorID, player: PlayerID | None = None
    ) -> list[tuple[int, int]]:
        """Coordinates selecting `color_id` would capture (current player by default)."""
        if player is None:
            player = self.state.current_player
        if player is None:
            return []
        return preview_captures(self.board, color_id, player)

    def selection_for_tile(self, row: int, column: int) -> SelectionEvent | None:
        """Selection capturing the tile at (row, column) for the current player.

        Returns None if that tile can't be captured right now.
        """
        player = self.state.current_player
        if player is None or not self.state.is_running:
            return None
        tile = self.board.get(row, column)
        if tile is None or not isinstance(tile.state, UnownedState):
            return None
        color_id = tile.state.color_id
        if (row, column) not in self.preview(color_id, player):
            return None
        return SelectionEvent(color_id=color_id, player=player)

    # Input

    def submit(self, selection: SelectionEvent) -> None:
        """Queue a selection for the next tick."""
        if not self.state.is_running:
            raise SelectionError(
                f"Match is not running (phase: {self.state.phase.kind!r})"
            )
        if selection.player != self.state.current_player:
            raise SelectionError(
                f"Not the turn of player {selection.player} "
                f"(current: {self.state.current_player})"
            )
        if selection.color_id not in self.state.color_ids:
            raise SelectionError(f"Unknown color id: {selection.color_id}")
        if len(self._pending) > 0:
            raise SelectionError("A selection is already waiting for this turn.")
        self._pending.append(selection)

    # Pipeline

    def _resolve_pending(self) -> tuple[list[SelectionEvent], list[CaptureEvent]]:
        """Resolve queued selections, passing the turn after each one."""
        resolved: list[SelectionEvent] = []
        captures: list[CaptureEvent] = []
        while self._pending:
            selection = self._pending.popleft()
            if selection.player not in self.players:
                logger.warning(
                    f"Skipping selection by unknown player {selection.player}"
                )
                continue
            captures += resolve_selection(self.board, selection)
            self.state.player_order = rotate_turn(self.state.player_order)
            self._head_ticks = 0
            resolved.append(selection)
        return resolved, captures

    def _update_scores(self) -> None:
        """Recompute scores and end the match if someone is stuck."""
        result = evaluate(self.board, list(self.players), list(self.state.color_ids))
        for pid, player in self.players.items():
            player.score = result.scores.get(pid, 0)
        if result.is_over and result.winner is not None:
            self.state.advance_phase(OverPhase(winner=result.winner))
            winner = self.players[result.winner]
            logger.info(f"Winner: {winner.name} ({winner.score} tiles)")

    def _queue_ai_move(self) -> None:
        """Let a bot at the head of the turn order pick its selection."""
        if len(self._pending) > 0:
            return
        head = self.current_player
        if head is None:
            logger.warning(f"Current player {self.state.current_player} is unknown")
            return
        selection = perform_ai_move(
            self.board,
            head,
            list(self.state.color_ids),
            waited_ticks=self._head_ticks,
        )
        if selection is None:
            self._head_ticks += 1
        else:
            self._pending.append(selection)

    def tick(self) -> TickResult:
        """Run one step of the match. Does nothing unless the match is running."""
        if not self.state.is_running:
            return TickResult(tick=self.n_ticks, scores=self.scores, phase=self.state.phase)
        self.n_ticks += 1

        resolved, captures = self._resolve_pending()
        self._update_scores()
        if self.state.is_running:
            self._queue_ai_move()

        return TickResult(
            tick=self.n_ticks,
            resolved=resolved,
            captures=captures,
            scores=self.scores,
            phase=self.state.phase,
        )

    def run(self, max_ticks: int = 10_000) -> PlayerID | None:
        """Tick until the match is over (or `max_ticks` pass). Returns the winner."""
        for _ in range(max_ticks):
            if not self.state.is_running:
                break
            self.tick()
        return self.state.winner
