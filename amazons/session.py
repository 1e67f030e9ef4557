"""A live game with human/AI seats and a background AI worker.

The search runs on a dedicated thread against a clone of the live state, so
the caller stays responsive. At most one search is in flight: before a new
search, a new game or a cancel request, the previous worker is signalled
through its cancellation event and joined.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

import logging
import threading

from .ai import get_best_move
from .board import BoardDimension, Player
from .difficulty import Difficulty, PlayerType
from .errors import InvalidConfigurationError, SearchCanceled
from .game import Game
from .state import Move

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        dimension: Union[BoardDimension, int, str] = BoardDimension.TEN,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        white: Union[PlayerType, str] = PlayerType.HUMAN,
        black: Union[PlayerType, str] = PlayerType.AI,
    ) -> None:
        self.game = Game(dimension, difficulty)
        self.seats: Dict[Player, PlayerType] = {
            Player.WHITE: PlayerType.parse(white),
            Player.BLACK: PlayerType.parse(black),
        }
        self.last_error: Optional[str] = None
        self._lock = threading.RLock()
        self._cancel = threading.Event()
        self._worker: Optional[threading.Thread] = None
        self._generation = 0
        self._thinking = False

    @property
    def ai_thinking(self) -> bool:
        with self._lock:
            return self._thinking

    def is_current_player_ai(self) -> bool:
        with self._lock:
            return self.seats.get(self.game.state.current_player) == PlayerType.AI

    def new_game(
        self,
        dimension: Union[BoardDimension, int, str, None] = None,
        difficulty: Union[Difficulty, str, None] = None,
        white: Union[PlayerType, str, None] = None,
        black: Union[PlayerType, str, None] = None,
    ) -> None:
        """Start over; if White is an AI seat its first search starts right away."""
        # Validate everything before the running game is disturbed.
        if dimension is not None:
            dimension = BoardDimension.parse(dimension)
        if difficulty is not None:
            difficulty = Difficulty.parse(difficulty)
        seats = dict(self.seats)
        if white is not None:
            seats[Player.WHITE] = PlayerType.parse(white)
        if black is not None:
            seats[Player.BLACK] = PlayerType.parse(black)

        self.finalize_worker()
        with self._lock:
            self.game.reset(dimension, difficulty)
            self.seats = seats
            self._generation += 1
            self._thinking = False
            self.last_error = None
            logger.info(
                "New %s game (%s), white=%s black=%s",
                BoardDimension(self.game.state.dimension).label,
                self.game.difficulty.value,
                seats[Player.WHITE].value,
                seats[Player.BLACK].value,
            )
        self.request_ai_move()

    def play_human_move(self, move: Move) -> bool:
        """Apply a move entered by a person; ``False`` rejects the gesture."""
        with self._lock:
            if self._thinking or self.game.is_game_over():
                return False
            if self.is_current_player_ai():
                logger.warning("Rejected human move for the %s AI seat", move.player.label)
                return False
            if not self.game.is_legal(move):
                logger.warning("Rejected illegal move %s", move.describe())
                return False
            self.game.push(move)
        self.request_ai_move()
        return True

    def set_seat(self, player: Player, player_type: Union[PlayerType, str]) -> bool:
        """Switch one seat mid-game; ``True`` if an AI search started."""
        if player not in (Player.WHITE, Player.BLACK):
            raise InvalidConfigurationError("Unknown seat", context={"player": player})
        seat_type = PlayerType.parse(player_type)

        self.finalize_worker()
        with self._lock:
            self.seats[player] = seat_type
            self._generation += 1
            self._thinking = False
            logger.info("%s seat is now %s", player.label, seat_type.value)
        return self.request_ai_move()

    def request_ai_move(self) -> bool:
        """Start a background search if the side to move is an AI seat."""
        with self._lock:
            if self._thinking or self.game.is_game_over() or not self.is_current_player_ai():
                return False

        self.finalize_worker()
        with self._lock:
            self._cancel = threading.Event()
            self._thinking = True
            self.last_error = None
            worker = threading.Thread(
                target=self._run,
                args=(self._generation, self._cancel),
                name="amazons-ai",
                daemon=True,
            )
            self._worker = worker
        worker.start()
        return True

    def cancel_ai(self) -> bool:
        """Abort the in-flight search, if any, and wait for its thread."""
        with self._lock:
            was_thinking = self._thinking
        self.finalize_worker()
        with self._lock:
            self._thinking = False
        return was_thinking

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker is done; ``False`` if it is still running."""
        with self._lock:
            worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout)
        return not self.ai_thinking

    def finalize_worker(self) -> None:
        with self._lock:
            worker = self._worker
            self._cancel.set()
        if worker is not None and worker is not threading.current_thread():
            worker.join()
        with self._lock:
            if self._worker is worker:
                self._worker = None

    def close(self) -> None:
        self.finalize_worker()

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            snap = self.game.snapshot()
            snap["ai_thinking"] = self._thinking
            snap["ai_error"] = self.last_error
            snap["white"] = self.seats[Player.WHITE].value
            snap["black"] = self.seats[Player.BLACK].value
            return snap

    def _run(self, generation: int, cancel: threading.Event) -> None:
        try:
            # Keep playing while the side to move is an AI seat (AI vs AI).
            while True:
                with self._lock:
                    if generation != self._generation or cancel.is_set():
                        return
                    if self.game.is_game_over() or not self.is_current_player_ai():
                        return
                    snapshot = self.game.state.clone()
                    difficulty = self.game.difficulty

                move = get_best_move(snapshot, difficulty, cancel)

                with self._lock:
                    if generation != self._generation or cancel.is_set():
                        return
                    if move is None:
                        # The side to move is stuck; record the loss.
                        self.game.settle()
                        return
                    self.game.push(move)
                    logger.info("AI (%s) played %s", move.player.label, move.describe())
        except SearchCanceled:
            logger.debug("AI search canceled")
        except Exception as exc:  # noqa: BLE001
            logger.exception("AI search failed")
            with self._lock:
                if generation == self._generation:
                    self.last_error = str(exc) or exc.__class__.__name__
        finally:
            with self._lock:
                if generation == self._generation:
                    self._thinking = False
