"""Shared positions for the MiniChess tests."""

import pytest

from minichess.game.state import Position

# Black king boxed in the corner by two White rooks; Black to move is mated.
CHECKMATE_ROWS = [
    "k...R",
    "....R",
    ".....",
    ".....",
    ".....",
    "..K..",
]

# Black king not attacked, but every neighbouring square is covered by the queen.
STALEMATE_ROWS = [
    "k....",
    ".....",
    ".Q...",
    ".....",
    ".....",
    "....K",
]

# White to move mates with Rd3-d6: the rook on e5 already covers rank 5.
MATE_IN_ONE_ROWS = [
    "k....",
    "....R",
    ".....",
    "...R.",
    ".....",
    "..K..",
]

# Two kings only, far apart.
KINGS_ONLY_ROWS = [
    "k....",
    ".....",
    ".....",
    ".....",
    ".....",
    "....K",
]


@pytest.fixture
def initial_position():
    return Position.initial()


@pytest.fixture
def checkmate_position():
    return Position.from_rows(CHECKMATE_ROWS)


@pytest.fixture
def stalemate_position():
    return Position.from_rows(STALEMATE_ROWS)


@pytest.fixture
def mate_in_one_position():
    return Position.from_rows(MATE_IN_ONE_ROWS)


@pytest.fixture
def kings_only_position():
    return Position.from_rows(KINGS_ONLY_ROWS)
