from __future__ import annotations

import pytest

from amazons import BoardDimension, Difficulty, GameState, Player, start_new_game

# White's only legal move: (0,0) -> (0,1), arrow back on (0,0).
ONE_MOVE_ROWS = [
    "W.XXXX",
    "XXXXXX",
    "..BB.X",
    "..BBXX",
    "...XXW",
    "XXXXWW",
]

# Every White queen is walled in; the one on (1,1) by arrows on all eight sides.
WHITE_BOXED_ROWS = [
    "XXX.B.",
    "XWX..B",
    "XXX.BB",
    "XXXX..",
    "WXWXX.",
    "XXXWX.",
]


@pytest.fixture
def start_6x6() -> GameState:
    return start_new_game(BoardDimension.SIX, Difficulty.EASY)


@pytest.fixture
def one_move_state() -> GameState:
    return GameState.from_rows(ONE_MOVE_ROWS, Player.WHITE)


@pytest.fixture
def white_boxed_state() -> GameState:
    return GameState.from_rows(WHITE_BOXED_ROWS, Player.BLACK)
