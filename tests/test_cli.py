from __future__ import annotations

import pytest

from pyimp.cli import main, parse_binding


def test_runs_factorial(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["factorial", "--set", "In=5"]) == 0
    out = capsys.readouterr().out
    assert "Out: 120" in out
    assert "{In: 0, Out: 120}" in out


def test_show_prints_source_and_core(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["square_root", "--set", "A=10", "--show"]) == 0
    out = capsys.readouterr().out
    assert "while (A >= B * B) {" in out
    assert "B := B + 1" in out
    assert "B: 3" in out


def test_list(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    for name in ("factorial", "square_root", "fibonacci"):
        assert name in out


def test_unknown_program(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["mastermind"]) == 1
    assert "Unknown program" in capsys.readouterr().out


def test_max_steps_failure(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["factorial", "--set", "In=50", "--max-steps", "5"]) == 1
    assert "NonTermination" in capsys.readouterr().out


def test_bad_binding_exits() -> None:
    with pytest.raises(SystemExit):
        main(["factorial", "--set", "In"])


@pytest.mark.parametrize(
    "text, expected",
    [("In=5", ("In", 5)), ("A = -3", ("A", -3))],
)
def test_parse_binding(text: str, expected: tuple[str, int]) -> None:
    assert parse_binding(text) == expected
