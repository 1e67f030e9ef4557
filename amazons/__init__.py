"""Game of the Amazons engine: game state, rules, evaluation, and AI search.

Modules:
- board: Tiles, players, positions and the square grid
- state: Moves, starting layouts and the game state
- rules: Ray casting, move generation, legality and move application
- evaluator: Mobility, territory and spatial-influence evaluation
- ai: Minimax with alpha-beta pruning and cooperative cancellation
- difficulty: Difficulty tiers and their search profiles
- game: Facade over one game for the web/API layer
- session: Human/AI seats with a background AI worker
"""

from .board import (
    INVALID_POSITION,
    Board,
    BoardDimension,
    Player,
    Position,
    TileContent,
    opponent_of,
)
from .difficulty import Difficulty, PlayerType, SearchProfile, profile_for
from .errors import AmazonsError, IllegalMoveError, InvalidConfigurationError, SearchCanceled
from .state import GameState, Move, start_new_game
from .rules import (
    apply_move,
    evaluate_win_state,
    gather_reachable_tiles,
    generate_moves_for_player,
    has_any_legal_move,
    is_move_legal,
    ray_cast,
)
from .evaluator import Evaluator
from .ai import AIPlayer, SearchResult, get_best_move, minimax
from .game import Game
from .session import GameSession

__all__ = [
    "INVALID_POSITION",
    "Board",
    "BoardDimension",
    "Player",
    "Position",
    "TileContent",
    "opponent_of",
    "Difficulty",
    "PlayerType",
    "SearchProfile",
    "profile_for",
    "AmazonsError",
    "IllegalMoveError",
    "InvalidConfigurationError",
    "SearchCanceled",
    "GameState",
    "Move",
    "start_new_game",
    "apply_move",
    "evaluate_win_state",
    "gather_reachable_tiles",
    "generate_moves_for_player",
    "has_any_legal_move",
    "is_move_legal",
    "ray_cast",
    "Evaluator",
    "AIPlayer",
    "SearchResult",
    "get_best_move",
    "minimax",
    "Game",
    "GameSession",
]
