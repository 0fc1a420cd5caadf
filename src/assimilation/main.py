"""Main loop."""

import argparse
import logging

from assimilation.board.levels import LevelLibrary
from assimilation.data import base_game
from assimilation.engine.match import Match, MatchConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line arguments of the bot-vs-bot demo."""
    parser = argparse.ArgumentParser(
        prog="assimilation", description="Play a bot-vs-bot match on a level preset"
    )
    parser.add_argument(
        "level",
        nargs="?",
        choices=LevelLibrary().level_names,
        default=MatchConfig().level_name,
        help="Level preset to play on",
    )
    parser.add_argument(
        "colors",
        nargs="?",
        type=int,
        choices=range(base_game.min_colors, base_game.max_colors + 1),
        default=MatchConfig().num_colors,
        help="Number of colors on the board",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the board colors"
    )
    return parser


def run_demo(argv: list[str] | None = None) -> Match:
    """Play a bot-vs-bot match on a level preset."""
    args = build_parser().parse_args(argv)
    config = MatchConfig(level_name=args.level, num_colors=args.colors, seed=args.seed)

    players = [base_game.make_bot(1, name="Bot A"), base_game.make_bot(2, name="Bot B")]
    match = Match(players, config=config)
    match.start()

    # Every bot move captures at least one tile, so this is plenty
    match.run(max_ticks=len(match.board) * 4 + 10)
    if not match.state.is_over:
        logger.warning(f"Match still running after {match.n_ticks} ticks")
    for player in match.players.values():
        logger.info(f"{player.name} Score: {player.score}")
    return match


def main():
    logging.basicConfig(level=logging.INFO)
    run_demo()


if __name__ == "__main__":
    main()
