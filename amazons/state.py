from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Union

from .board import (
    Board,
    BoardDimension,
    Player,
    Position,
    TileContent,
    tile_for_player,
)
from .difficulty import Difficulty
from .errors import InvalidConfigurationError

QUEENS_PER_PLAYER = 4

# White starts at the bottom, Black at the top.
STARTING_LAYOUTS: Dict[BoardDimension, Dict[Player, List[Position]]] = {
    BoardDimension.SIX: {
        Player.WHITE: [Position(5, 1), Position(5, 4), Position(4, 0), Position(4, 5)],
        Player.BLACK: [Position(0, 1), Position(0, 4), Position(1, 0), Position(1, 5)],
    },
    BoardDimension.EIGHT: {
        Player.WHITE: [Position(7, 2), Position(7, 5), Position(5, 0), Position(5, 7)],
        Player.BLACK: [Position(0, 2), Position(0, 5), Position(2, 0), Position(2, 7)],
    },
    BoardDimension.TEN: {
        Player.WHITE: [Position(9, 3), Position(9, 6), Position(6, 0), Position(6, 9)],
        Player.BLACK: [Position(0, 3), Position(0, 6), Position(3, 0), Position(3, 9)],
    },
}

TILE_SYMBOLS: Dict[TileContent, str] = {
    TileContent.EMPTY: ".",
    TileContent.WHITE_QUEEN: "W",
    TileContent.BLACK_QUEEN: "B",
    TileContent.ARROW: "X",
}
_SYMBOL_TILES = {symbol: tile for tile, symbol in TILE_SYMBOLS.items()}


@dataclass(frozen=True)
class Move:
    """One ply: a queen relocation followed by an arrow shot."""

    player: Player
    queen_from: Position
    queen_to: Position
    arrow: Position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player.label,
            "from": list(self.queen_from),
            "to": list(self.queen_to),
            "arrow": list(self.arrow),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], player: Player) -> "Move":
        """Build a move from ``{"from": [r, c], "to": [r, c], "arrow": [r, c]}``."""
        try:
            return cls(
                player=player,
                queen_from=_parse_position(data["from"]),
                queen_to=_parse_position(data["to"]),
                arrow=_parse_position(data["arrow"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed move: {data!r}") from exc

    def describe(self) -> str:
        """1-based coordinates, as shown in the move log."""
        return (
            f"Queen ({self.queen_from.row + 1},{self.queen_from.col + 1}) -> "
            f"({self.queen_to.row + 1},{self.queen_to.col + 1}), "
            f"Arrow -> ({self.arrow.row + 1},{self.arrow.col + 1})"
        )


def _parse_position(value: Sequence[Any]) -> Position:
    if isinstance(value, (str, bytes)) or len(value) != 2:
        raise TypeError(f"Expected [row, col], got {value!r}")
    return Position(int(value[0]), int(value[1]))


@dataclass
class GameState:
    """Complete position of one game.

    The queen lists and the board's queen tiles describe the same thing
    twice; only :meth:`relocate_queen` moves a queen, and it updates both.
    """

    board: Board = field(default_factory=Board)
    current_player: Player = Player.WHITE
    difficulty: Difficulty = Difficulty.MEDIUM
    queens: Dict[Player, List[Position]] = field(
        default_factory=lambda: {Player.WHITE: [], Player.BLACK: []}
    )
    arrows: List[Position] = field(default_factory=list)
    history: List[Move] = field(default_factory=list)
    is_finished: bool = False
    winner: Player = Player.NONE

    @property
    def dimension(self) -> int:
        return self.board.dimension

    def queen_positions(self, player: Player) -> List[Position]:
        if player == Player.NONE:
            raise ValueError("Player.NONE has no queens")
        return self.queens[player]

    def relocate_queen(self, player: Player, origin: Position, destination: Position) -> None:
        positions = self.queen_positions(player)
        try:
            index = positions.index(origin)
        except ValueError:
            raise ValueError(f"No {player.label} queen at {tuple(origin)}") from None
        self.board.set(origin.row, origin.col, TileContent.EMPTY)
        self.board.set(destination.row, destination.col, tile_for_player(player))
        positions[index] = destination

    def place_arrow(self, position: Position) -> None:
        self.board.set(position.row, position.col, TileContent.ARROW)
        self.arrows.append(position)

    def record_move(self, move: Move) -> None:
        self.history.append(move)

    def mark_finished(self, winner: Player) -> None:
        self.is_finished = True
        self.winner = winner

    def clear_finished(self) -> None:
        self.is_finished = False
        self.winner = Player.NONE

    def empty_count(self) -> int:
        return self.board.count(TileContent.EMPTY)

    def clone(self, keep_history: bool = True) -> "GameState":
        """Value copy; search clones drop the history they never read."""
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            difficulty=self.difficulty,
            queens={player: list(positions) for player, positions in self.queens.items()},
            arrows=list(self.arrows),
            history=list(self.history) if keep_history else [],
            is_finished=self.is_finished,
            winner=self.winner,
        )

    def to_rows(self) -> List[str]:
        size = self.board.dimension
        return [
            "".join(TILE_SYMBOLS[self.board.get(row, col)] for col in range(size))
            for row in range(size)
        ]

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        current_player: Player = Player.WHITE,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> "GameState":
        """Build a position from a diagram of ``.``, ``W``, ``B`` and ``X`` rows.

        Pieces are listed in row-major order. The finished flag is left
        clear; call :func:`amazons.rules.evaluate_win_state` to settle it.
        """
        dimension = BoardDimension.parse(len(rows))
        state = cls(board=Board(dimension), current_player=current_player, difficulty=difficulty)
        for row, line in enumerate(rows):
            if len(line) != dimension:
                raise InvalidConfigurationError(
                    "Diagram rows must be square", context={"row": row, "length": len(line)}
                )
            for col, symbol in enumerate(line):
                tile = _SYMBOL_TILES.get(symbol)
                if tile is None:
                    raise InvalidConfigurationError(
                        "Unknown diagram symbol", context={"symbol": symbol}
                    )
                state.board.set(row, col, tile)
                position = Position(row, col)
                if tile == TileContent.WHITE_QUEEN:
                    state.queens[Player.WHITE].append(position)
                elif tile == TileContent.BLACK_QUEEN:
                    state.queens[Player.BLACK].append(position)
                elif tile == TileContent.ARROW:
                    state.arrows.append(position)

        for player, positions in state.queens.items():
            if len(positions) != QUEENS_PER_PLAYER:
                raise InvalidConfigurationError(
                    "Each side needs four queens",
                    context={"player": player.label, "queens": len(positions)},
                )
        return state


def start_new_game(
    dimension: Union[BoardDimension, int, str] = BoardDimension.TEN,
    difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
) -> GameState:
    """Fresh game on the fixed layout for ``dimension``, White to move."""
    size = BoardDimension.parse(dimension)
    layout = STARTING_LAYOUTS[size]
    state = GameState(board=Board(size), difficulty=Difficulty.parse(difficulty))
    for player, positions in layout.items():
        tile = tile_for_player(player)
        state.queens[player] = list(positions)
        for position in positions:
            state.board.set(position.row, position.col, tile)
    return state
