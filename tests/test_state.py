from __future__ import annotations

import pytest

from amazons import (
    INVALID_POSITION,
    Board,
    BoardDimension,
    GameState,
    InvalidConfigurationError,
    Move,
    Player,
    Position,
    TileContent,
    opponent_of,
    start_new_game,
)
from amazons.state import STARTING_LAYOUTS


def test_opponent_of_is_an_involution():
    assert opponent_of(Player.WHITE) == Player.BLACK
    assert opponent_of(opponent_of(Player.BLACK)) == Player.BLACK
    assert opponent_of(Player.NONE) == Player.NONE


def test_board_access_fails_fast_outside_the_grid():
    board = Board(BoardDimension.SIX)
    assert board.get(5, 5) == TileContent.EMPTY
    with pytest.raises(IndexError):
        board.get(6, 0)
    with pytest.raises(IndexError):
        board.set(-1, 2, TileContent.ARROW)


def test_invalid_position_sentinel():
    assert not INVALID_POSITION.is_valid()
    assert Position(0, 0).is_valid()
    assert Position(2, 3) == (2, 3)


@pytest.mark.parametrize("dimension", list(BoardDimension))
def test_start_new_game_places_fixed_layout(dimension):
    state = start_new_game(dimension)
    layout = STARTING_LAYOUTS[dimension]

    assert state.current_player == Player.WHITE
    assert not state.is_finished and state.winner == Player.NONE
    assert state.arrows == [] and state.history == []
    assert state.queen_positions(Player.WHITE) == layout[Player.WHITE]
    assert state.board.count(TileContent.WHITE_QUEEN) == 4
    assert state.board.count(TileContent.BLACK_QUEEN) == 4
    for pos in layout[Player.BLACK]:
        assert state.board.get(*pos) == TileContent.BLACK_QUEEN
    assert state.empty_count() == dimension * dimension - 8


@pytest.mark.parametrize("size", [7, "12x12", "big", 0])
def test_unsupported_board_size_is_rejected(size):
    with pytest.raises(InvalidConfigurationError):
        start_new_game(size)


def test_board_dimension_parse_accepts_labels():
    assert BoardDimension.parse("8x8") == BoardDimension.EIGHT
    assert BoardDimension.parse("10") == BoardDimension.TEN
    assert BoardDimension.SIX.label == "6x6"


def test_clone_does_not_alias(start_6x6):
    clone = start_6x6.clone()
    assert clone == start_6x6

    clone.relocate_queen(Player.WHITE, Position(5, 1), Position(3, 1))
    clone.place_arrow(Position(3, 3))
    assert clone != start_6x6
    assert start_6x6.queen_positions(Player.WHITE)[0] == Position(5, 1)
    assert start_6x6.board.get(3, 3) == TileContent.EMPTY


def test_search_clone_drops_history_only(start_6x6):
    start_6x6.record_move(Move(Player.WHITE, Position(5, 1), Position(4, 1), Position(3, 1)))
    clone = start_6x6.clone(keep_history=False)
    assert clone.history == []
    assert clone.board == start_6x6.board
    assert clone.current_player == start_6x6.current_player


def test_from_rows_round_trips_diagram(one_move_state):
    assert one_move_state.to_rows()[0] == "W.XXXX"
    assert one_move_state.queen_positions(Player.WHITE)[0] == Position(0, 0)
    assert len(one_move_state.arrows) == one_move_state.board.count(TileContent.ARROW)


def test_from_rows_requires_four_queens_each():
    rows = ["W....."] + ["......"] * 4 + ["BBBB.."]
    with pytest.raises(InvalidConfigurationError):
        GameState.from_rows(rows)


def test_move_from_dict_rejects_malformed_payloads():
    move = Move.from_dict({"from": [5, 1], "to": [4, 1], "arrow": [3, 1]}, Player.WHITE)
    assert move.queen_to == Position(4, 1)
    assert move.to_dict()["arrow"] == [3, 1]

    with pytest.raises(ValueError):
        Move.from_dict({"from": [5, 1], "to": [4, 1]}, Player.WHITE)
    with pytest.raises(ValueError):
        Move.from_dict({"from": "e2", "to": [4, 1], "arrow": [3, 1]}, Player.WHITE)


def test_move_describe_uses_one_based_coordinates():
    move = Move(Player.WHITE, Position(5, 1), Position(4, 1), Position(0, 0))
    assert move.describe() == "Queen (6,2) -> (5,2), Arrow -> (1,1)"
