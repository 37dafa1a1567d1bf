"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import io

import matplotlib

# Headless test runs: never open a GUI window.
matplotlib.use("Agg")

import pytest

from trifold.board import GameBoard, Tile
from trifold.config import GameConfig
from trifold.session import GameSession


def _empty_rows(rows: range, bound: int) -> GameBoard:
    """Rectangular board of empty cells, x in [-bound, bound] for each row."""
    return GameBoard({(x, y): Tile() for y in rows for x in range(-bound, bound + 1)})


@pytest.fixture
def board() -> GameBoard:
    """The standard 54-cell starting board."""
    return GameBoard()


@pytest.fixture
def empty_rows():
    """Factory: empty_rows(rows, bound) builds a rectangular board of empty cells."""
    return _empty_rows


@pytest.fixture
def three_rows() -> GameBoard:
    """Empty cells for y in {-1, 0, 1}, x in [-4, 4]."""
    return _empty_rows(range(-1, 2), 4)


@pytest.fixture
def echo_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def session(echo_stream: io.StringIO) -> GameSession:
    return GameSession(GameBoard(), GameConfig(), stream=echo_stream)
