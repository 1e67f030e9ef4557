from __future__ import annotations

import pytest

from amazons import Difficulty, Evaluator, Player, Position, apply_move, generate_moves_for_player
from amazons import evaluator as evaluator_module
from amazons.evaluator import (
    TERMINAL_SCORE,
    flood_fill_reachable,
    mobility_count,
    positional_value,
    spatial_influence_score,
    territory_score,
)


def test_finished_game_scores_dominate(white_boxed_state):
    white_boxed_state.current_player = Player.WHITE
    white_boxed_state.mark_finished(Player.BLACK)
    for difficulty in Difficulty:
        evaluator = Evaluator.for_difficulty(difficulty)
        assert evaluator.evaluate(white_boxed_state, Player.BLACK) == TERMINAL_SCORE
        assert evaluator.evaluate(white_boxed_state, Player.WHITE) == -TERMINAL_SCORE


def test_heuristic_scores_stay_far_below_terminal_band(start_6x6):
    evaluator = Evaluator.for_difficulty(Difficulty.HARD)
    for move in generate_moves_for_player(start_6x6, Player.WHITE, move_cap=10):
        child = start_6x6.clone()
        apply_move(child, move)
        assert abs(evaluator.evaluate(child, Player.WHITE)) < TERMINAL_SCORE // 1000


def test_mobility_is_sampled_up_to_cap(start_6x6, one_move_state):
    assert mobility_count(start_6x6, Player.WHITE, 48) == 48
    assert mobility_count(one_move_state, Player.WHITE, 48) == 1
    assert mobility_count(one_move_state, Player.WHITE) == 1


def test_symmetric_start_is_balanced_on_mobility(start_6x6):
    easy = Evaluator.for_difficulty(Difficulty.EASY)
    assert easy.evaluate(start_6x6, Player.WHITE) == 0
    assert easy.evaluate(start_6x6, Player.BLACK) == 0


def test_flood_fill_counts_own_square_and_stops_at_walls(one_move_state, white_boxed_state):
    assert flood_fill_reachable(one_move_state, Position(0, 0)) == 2
    assert flood_fill_reachable(white_boxed_state, Position(1, 1)) == 1
    assert flood_fill_reachable(one_move_state, Position(9, 9)) == 0


def test_territory_favours_the_side_with_room(white_boxed_state):
    score = territory_score(white_boxed_state, Player.BLACK)
    assert score > 0
    assert territory_score(white_boxed_state, Player.WHITE) == -score


def test_positional_value_decays_to_zero_in_corner(one_move_state, start_6x6):
    # Corner queen with a single free neighbour: only the reach bonus remains.
    assert positional_value(one_move_state, Position(0, 0)) == pytest.approx(0.25)
    centre = positional_value(start_6x6, Position(2, 2))
    corner = positional_value(start_6x6, Position(0, 0))
    assert centre > corner


def test_spatial_influence_is_differenced(start_6x6):
    assert spatial_influence_score(start_6x6, Player.WHITE) == -spatial_influence_score(start_6x6, Player.BLACK)


def test_cheaper_tiers_skip_expensive_terms(start_6x6, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("term should not be computed")

    monkeypatch.setattr(evaluator_module, "territory_score", fail)
    Evaluator.for_difficulty(Difficulty.MEDIUM).evaluate(start_6x6, Player.WHITE)

    monkeypatch.setattr(evaluator_module, "spatial_influence_score", fail)
    Evaluator.for_difficulty(Difficulty.EASY).evaluate(start_6x6, Player.WHITE)

    with pytest.raises(AssertionError):
        Evaluator.for_difficulty(Difficulty.HARD).evaluate(start_6x6, Player.WHITE)


def test_evaluation_prefers_mobile_side(one_move_state):
    evaluator = Evaluator.for_difficulty(Difficulty.HARD)
    assert evaluator.evaluate(one_move_state, Player.BLACK) > 0
    assert evaluator.evaluate(one_move_state, Player.WHITE) < 0
