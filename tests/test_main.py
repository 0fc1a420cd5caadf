import pytest

from assimilation.main import build_parser, run_demo


def test_demo_match_finishes():
    match = run_demo(["square", "3", "--seed", "7"])
    assert match.config.num_colors == 3
    assert match.config.seed == 7
    assert match.state.is_over
    assert len(match.board) == 100
    assert match.state.winner in match.players


def test_demo_defaults():
    match = run_demo([])
    assert match.config.level_name == "hexagon"
    assert match.config.num_colors == 5
    assert match.state.is_over


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--help"])
    assert exc_info.value.code == 0
    assert "square" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [["nope"], ["square", "x"], ["square", "7"], ["square", "1"], ["--seed", "abc"]],
)
def test_bad_arguments_are_rejected(argv: list[str], capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_demo(argv)
    assert exc_info.value.code == 2
    assert "error" in capsys.readouterr().err
