from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Union

from .board import Player, Position, TileContent, opponent_of
from .difficulty import Difficulty, SearchProfile, profile_for
from .rules import gather_reachable_tiles, generate_moves_for_player
from .state import GameState

# Any finished game outranks every heuristic score the terms below can add up to.
TERMINAL_SCORE = 100_000_000

CENTER_WEIGHT = 10.0
REACH_WEIGHT = 0.25


def terminal_score(state: GameState, perspective: Player) -> int:
    if not state.is_finished:
        return 0
    if state.winner == perspective:
        return TERMINAL_SCORE
    if state.winner == opponent_of(perspective):
        return -TERMINAL_SCORE
    return 0


def mobility_count(state: GameState, player: Player, sample: Optional[int] = None) -> int:
    return len(generate_moves_for_player(state, player, move_cap=sample))


def flood_fill_reachable(state: GameState, start: Position) -> int:
    """Empty tiles a queen on ``start`` could eventually walk to, its own square included."""
    board = state.board
    if not board.is_inside(start.row, start.col):
        return 0

    working = board.copy()
    working.set(start.row, start.col, TileContent.EMPTY)

    size = board.dimension
    visited: List[bool] = [False] * (size * size)
    visited[start.row * size + start.col] = True
    frontier: Deque[Position] = deque([start])
    count = 1
    while frontier:
        current = frontier.popleft()
        for neighbor in gather_reachable_tiles(working, current):
            index = neighbor.row * size + neighbor.col
            if visited[index]:
                continue
            visited[index] = True
            frontier.append(neighbor)
            count += 1
    return count


def territory_score(state: GameState, perspective: Player) -> int:
    # Tiles reachable by two queens of one side count twice.
    own = sum(flood_fill_reachable(state, pos) for pos in state.queen_positions(perspective))
    other = sum(
        flood_fill_reachable(state, pos) for pos in state.queen_positions(opponent_of(perspective))
    )
    return own - other


def positional_value(state: GameState, position: Position) -> float:
    size = state.board.dimension
    center = (size - 1) / 2.0
    distance = abs(position.row - center) + abs(position.col - center)
    max_distance = float(size - 1)
    # 1.0 on the centre, 0.0 in the corners.
    closeness = 1.0 - distance / max_distance
    reach = len(gather_reachable_tiles(state.board, position))
    return CENTER_WEIGHT * closeness + REACH_WEIGHT * reach


def spatial_influence_score(state: GameState, perspective: Player) -> int:
    score = 0.0
    for position in state.queen_positions(perspective):
        score += positional_value(state, position)
    for position in state.queen_positions(opponent_of(perspective)):
        score -= positional_value(state, position)
    return int(score)


class Evaluator:
    """Static evaluation of Amazons positions.

    Scores are from ``perspective``'s point of view: positive is good for
    that player. Finished games score ``±TERMINAL_SCORE``; every other
    position is a weighted sum of mobility, spatial influence and territory,
    each taken as perspective minus opponent. Terms with weight zero are not
    computed at all.
    """

    def __init__(self, profile: Optional[SearchProfile] = None) -> None:
        self.profile = profile or profile_for(Difficulty.MEDIUM)

    @classmethod
    def for_difficulty(cls, difficulty: Union[Difficulty, str]) -> "Evaluator":
        return cls(profile_for(difficulty))

    def evaluate(self, state: GameState, perspective: Player) -> int:
        if state.is_finished:
            return terminal_score(state, perspective)

        profile = self.profile
        opponent = opponent_of(perspective)
        score = 0

        if profile.mobility_weight:
            sample = profile.mobility_sample
            mobility = mobility_count(state, perspective, sample) - mobility_count(state, opponent, sample)
            score += profile.mobility_weight * mobility

        if profile.spatial_weight:
            score += profile.spatial_weight * spatial_influence_score(state, perspective)

        # Flood fill is the expensive term.
        if profile.territory_weight:
            score += profile.territory_weight * territory_score(state, perspective)

        return score
