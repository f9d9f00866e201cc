from __future__ import annotations

import re

import pytest

from philosophers.args import INVALID_ARGUMENTS, USAGE
from philosophers.cli import main

_LINE = re.compile(r"^(\d+) (\d+) (.+)$")


def _parse_lines(text: str) -> list[tuple[int, int, str]]:
    result = []
    for line in text.splitlines():
        match = _LINE.match(line)
        assert match is not None, line
        result.append((int(match.group(1)), int(match.group(2)), match.group(3)))
    return result


@pytest.mark.parametrize(
    "argv",
    [[], ["1"], ["1", "2", "3"], ["1", "2", "3", "4", "5", "6"]],
)
def test_wrong_argument_count_prints_usage(argv, capsys):
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.err.strip() == USAGE
    assert captured.out == ""


@pytest.mark.parametrize(
    "argv",
    [
        ["0", "800", "200", "200"],
        ["5", "-800", "200", "200"],
        ["5", "800", "abc", "200"],
        ["5", "800", "200", "200", "0"],
        ["5", "800", "200", "99999999999"],
    ],
)
def test_invalid_arguments_report_error(argv, capsys):
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.err.strip() == INVALID_ARGUMENTS
    assert captured.out == ""


def test_single_philosopher_dies(capsys):
    assert main(["1", "50", "10", "10"]) == 0
    lines = _parse_lines(capsys.readouterr().out)
    statuses = [status for _, _, status in lines]
    assert statuses[0] == "is thinking"
    assert statuses[1] == "has taken a fork"
    assert statuses[-1] == "died"
    assert statuses.count("died") == 1
    assert all(ident == 1 for _, ident, _ in lines)
    assert lines[-1][0] >= 50


def test_everyone_eats_enough_and_nobody_dies(capsys):
    assert main(["5", "800", "10", "10", "2"]) == 0
    lines = _parse_lines(capsys.readouterr().out)
    statuses = [status for _, _, status in lines]
    assert "died" not in statuses
    for ident in range(1, 6):
        meals = sum(
            1 for _, who, status in lines if who == ident and status == "is eating"
        )
        assert meals >= 2


def test_timestamps_never_go_backwards(capsys):
    assert main(["4", "800", "10", "10", "1"]) == 0
    stamps = [stamp for stamp, _, _ in _parse_lines(capsys.readouterr().out)]
    assert stamps
    assert stamps == sorted(stamps)


def test_each_eating_follows_two_forks(capsys):
    assert main(["3", "800", "10", "10", "2"]) == 0
    lines = _parse_lines(capsys.readouterr().out)
    for ident in range(1, 4):
        events = [status for _, who, status in lines if who == ident]
        forks = 0
        for status in events:
            if status == "has taken a fork":
                forks += 1
            elif status == "is eating":
                assert forks == 2
                forks = 0