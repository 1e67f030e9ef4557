from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, Union

import logging
import time

from .board import Player
from .difficulty import Difficulty, SearchProfile, profile_for
from .errors import SearchCanceled
from .evaluator import Evaluator
from .rules import apply_move, evaluate_win_state, generate_moves_for_player
from .state import GameState, Move

logger = logging.getLogger(__name__)

INFINITY = 10**9


class CancelFlag(Protocol):
    """Anything with ``is_set()``; normally a :class:`threading.Event`."""

    def is_set(self) -> bool: ...


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    scored_moves: Optional[List[Tuple[Move, int]]] = None


class AIPlayer:
    """Minimax with alpha-beta pruning over cloned game states.

    Difficulty selects the depth, the per-node move cap and the evaluator
    terms. Root moves are ordered by a one-ply evaluation; on tiers with
    ``deep_slots`` only the best-ordered candidates get the full depth.
    A set cancellation flag aborts the search with :class:`SearchCanceled`.
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        cancel: Optional[CancelFlag] = None,
        move_cap: Optional[int] = None,
        evaluator: Optional[Evaluator] = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self.profile: SearchProfile = profile_for(self.difficulty)
        self.evaluator = evaluator if evaluator is not None else Evaluator(self.profile)
        self.move_cap = move_cap if move_cap is not None else self.profile.move_cap
        self.cancel = cancel
        self.nodes = 0

    def choose_move(self, state: GameState) -> Optional[Move]:
        return self.search(state).best_move

    def search(self, state: GameState) -> SearchResult:
        started = time.perf_counter()
        self.nodes = 0
        self._guard_cancel()

        # Work on a private copy; the caller's state is never touched.
        root = state.clone(keep_history=False)
        perspective = root.current_player
        maximizing_player = perspective

        moves: List[Move] = []
        if not root.is_finished:
            moves = generate_moves_for_player(root, perspective, self.move_cap)
        if not moves:
            score = self._leaf_score(root, perspective)
            logger.debug("No legal move for %s (score %d)", perspective.label, score)
            return SearchResult(best_move=None, score=score, nodes=0, scored_moves=[])

        ordered = self._order_moves(root, moves, perspective)

        depth = max(1, self.profile.depth)
        primary_depth = max(0, depth - 1)
        shallow_depth = max(0, primary_depth - 1)
        deep_slots = len(ordered)
        if self.profile.deep_slots is not None and len(ordered) > self.profile.deep_slots:
            deep_slots = self.profile.deep_slots

        best_move = ordered[0][0]
        best_score = -INFINITY
        scored_moves: List[Tuple[Move, int]] = []
        for index, (move, _) in enumerate(ordered):
            self._guard_cancel()
            child = root.clone(keep_history=False)
            apply_move(child, move, validate=False)
            depth_for_move = primary_depth if index < deep_slots else shallow_depth
            score = self.minimax(child, depth_for_move, -INFINITY, INFINITY, maximizing_player, perspective)
            scored_moves.append((move, score))
            # Strictly better only: ties keep the earlier, better-ordered move.
            if score > best_score:
                best_score = score
                best_move = move

        logger.debug(
            "%s search (%s): best %s score %d, %d nodes in %.3fs",
            perspective.label,
            self.difficulty.value,
            best_move.describe(),
            best_score,
            self.nodes,
            time.perf_counter() - started,
        )
        return SearchResult(best_move=best_move, score=best_score, nodes=self.nodes, scored_moves=scored_moves)

    def minimax(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        maximizing_player: Player,
        perspective: Player,
    ) -> int:
        self._guard_cancel()
        self.nodes += 1

        if depth <= 0 or state.is_finished:
            return self._leaf_score(state, perspective)

        current = state.current_player
        moves = generate_moves_for_player(state, current, self.move_cap)
        if not moves:
            return self._leaf_score(state, perspective)

        if current == maximizing_player:
            value = -INFINITY
            for move in moves:
                self._guard_cancel()
                child = state.clone(keep_history=False)
                apply_move(child, move, validate=False)
                value = max(value, self.minimax(child, depth - 1, alpha, beta, maximizing_player, perspective))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
            return value

        value = INFINITY
        for move in moves:
            self._guard_cancel()
            child = state.clone(keep_history=False)
            apply_move(child, move, validate=False)
            value = min(value, self.minimax(child, depth - 1, alpha, beta, maximizing_player, perspective))
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    def _order_moves(self, root: GameState, moves: List[Move], perspective: Player) -> List[Tuple[Move, int]]:
        scored: List[Tuple[Move, int]] = []
        for move in moves:
            self._guard_cancel()
            child = root.clone(keep_history=False)
            apply_move(child, move, validate=False)
            scored.append((move, self.evaluator.evaluate(child, perspective)))
        # Stable: equal heuristics keep generation order.
        scored.sort(key=lambda entry: entry[1], reverse=True)
        return scored

    def _leaf_score(self, state: GameState, perspective: Player) -> int:
        # Settle "no legal move" into an explicit result on a scratch copy.
        scratch = state.clone(keep_history=False)
        evaluate_win_state(scratch)
        return self.evaluator.evaluate(scratch, perspective)

    def _guard_cancel(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise SearchCanceled()


def minimax(
    state: GameState,
    depth: int,
    alpha: int,
    beta: int,
    maximizing_player: Player,
    perspective: Player,
    move_cap: int,
    evaluator: Optional[Evaluator] = None,
    cancel: Optional[CancelFlag] = None,
) -> int:
    """Score ``state`` for ``perspective``; ``evaluator`` defaults to the Medium terms."""
    player = AIPlayer(cancel=cancel, move_cap=move_cap, evaluator=evaluator)
    return player.minimax(state, depth, alpha, beta, maximizing_player, perspective)


def get_best_move(
    state: GameState,
    difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
    cancel: Optional[CancelFlag] = None,
) -> Optional[Move]:
    """Best move for the side to move, or ``None`` when it has none.

    Raises :class:`SearchCanceled` if ``cancel`` is set before the search
    completes.
    """
    return AIPlayer(difficulty, cancel=cancel).choose_move(state)
