from assimilation.data.models import BotKind, Player
from assimilation.engine.ai import choose_color, perform_ai_move
from assimilation.engine.capture import SelectionEvent

COLORS = [0, 1, 2, 3]


def test_picks_largest_capture(grid):
    board = grid("p1 c2 c2 c2", "c0 c1 c1 c3")
    assert choose_color(board, 1, COLORS) == 2


def test_ties_keep_lowest_id(grid):
    board = grid("p1 c1 c1 c1", "c0 c2 c2 c2")
    assert choose_color(board, 1, COLORS) == 1


def test_prefers_color_hugging_territory(grid):
    # Color 0 claims two tiles, color 1 only one, but that one touches
    # three owned tiles
    board = grid("p1 p1 c0", "p1 c1 -", "c0 - -")
    assert choose_color(board, 1, COLORS) == 1


def test_no_capture_defaults_to_lowest(grid):
    board = grid("p1 - c0")
    assert choose_color(board, 1, [2, 1, 3]) == 1


def test_deterministic(grid):
    board = grid("p1 c0 c1 c2", "c3 c1 c1 c0", "c2 c2 c3 c3")
    first = choose_color(board, 1, COLORS)
    assert choose_color(board, 1, COLORS) == first
    assert choose_color(board, 1, list(reversed(COLORS))) == first


def test_bot_makes_selection(grid, bot: Player):
    board = grid(f"p{bot.id} c3 c1")
    assert perform_ai_move(board, bot, COLORS) == SelectionEvent(
        color_id=3, player=bot.id
    )


def test_human_is_left_alone(grid, human: Player):
    board = grid(f"p{human.id} c3 c1")
    assert perform_ai_move(board, human, COLORS) is None
    assert perform_ai_move(board, None, COLORS) is None


def test_bot_delay(grid):
    slow = Player(id=4, name="Slow", kind=BotKind(delay_ticks=2))
    board = grid("p4 c1")
    assert perform_ai_move(board, slow, COLORS, waited_ticks=0) is None
    assert perform_ai_move(board, slow, COLORS, waited_ticks=1) is None
    assert perform_ai_move(board, slow, COLORS, waited_ticks=2) == SelectionEvent(
        color_id=1, player=4
    )
