from __future__ import annotations

from typing import Dict, List, Optional, Union

from .board import BoardDimension, Player, Position
from .difficulty import Difficulty
from .rules import (
    apply_move,
    arrow_targets,
    evaluate_win_state,
    generate_moves_for_player,
    is_move_legal,
    queen_destinations,
)
from .state import GameState, Move, start_new_game


class Game:
    """Owns the live game state and exposes a clean interface for the web/API.

    Moves go through the rules engine only; an illegal move raises
    :class:`~amazons.errors.IllegalMoveError` and leaves the state as it was.
    """

    def __init__(
        self,
        dimension: Union[BoardDimension, int, str] = BoardDimension.TEN,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
    ) -> None:
        self.state: GameState = start_new_game(dimension, difficulty)

    def reset(
        self,
        dimension: Union[BoardDimension, int, str, None] = None,
        difficulty: Union[Difficulty, str, None] = None,
    ) -> None:
        self.state = start_new_game(
            dimension if dimension is not None else self.state.dimension,
            difficulty if difficulty is not None else self.state.difficulty,
        )

    @property
    def difficulty(self) -> Difficulty:
        return self.state.difficulty

    def get_turn_color(self) -> str:
        return self.state.current_player.label

    def is_game_over(self) -> bool:
        return self.state.is_finished

    def get_winner(self) -> Optional[str]:
        if not self.state.is_finished or self.state.winner == Player.NONE:
            return None
        return self.state.winner.label

    def is_legal(self, move: Move) -> bool:
        return is_move_legal(self.state, move)

    def push(self, move: Move) -> None:
        apply_move(self.state, move)

    def settle(self) -> bool:
        """Finish the game if the side to move has no legal move."""
        return evaluate_win_state(self.state)

    def get_legal_moves(self, move_cap: Optional[int] = None) -> List[Move]:
        return generate_moves_for_player(self.state, self.state.current_player, move_cap)

    def targets(self, origin: Position, destination: Optional[Position] = None) -> List[Position]:
        """Queen destinations from ``origin``, or arrow targets once ``destination`` is chosen."""
        if destination is None:
            return queen_destinations(self.state, origin)
        return arrow_targets(self.state, origin, destination)

    def history_lines(self) -> List[str]:
        return [f"Move {number}: {move.describe()}" for number, move in enumerate(self.state.history, start=1)]

    def snapshot(self) -> Dict[str, object]:
        last_move: Optional[Dict[str, object]] = None
        if self.state.history:
            last_move = self.state.history[-1].to_dict()

        return {
            "size": self.state.dimension,
            "board": self.state.to_rows(),
            "turn": self.get_turn_color(),
            "difficulty": self.difficulty.value,
            "game_over": self.is_game_over(),
            "winner": self.get_winner(),
            "last_move": last_move,
            "history": self.history_lines(),
        }
