from __future__ import annotations

from enum import IntEnum
from typing import List, NamedTuple, Union

from .errors import InvalidConfigurationError


class Player(IntEnum):
    NONE = 0
    WHITE = 1
    BLACK = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class TileContent(IntEnum):
    EMPTY = 0
    WHITE_QUEEN = 1
    BLACK_QUEEN = 2
    ARROW = 3


class BoardDimension(IntEnum):
    SIX = 6
    EIGHT = 8
    TEN = 10

    @property
    def label(self) -> str:
        return f"{self.value}x{self.value}"

    @classmethod
    def parse(cls, value: Union["BoardDimension", int, str]) -> "BoardDimension":
        """Accept 8, "8", "8x8" or a member; anything else is a configuration error."""
        if isinstance(value, str):
            text = value.strip().lower()
            if "x" in text:
                text = text.split("x", 1)[0]
            try:
                value = int(text)
            except ValueError:
                raise InvalidConfigurationError(
                    "Unsupported board size", context={"size": value}
                ) from None
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigurationError(
                "Unsupported board size", context={"size": value}
            ) from None


class Position(NamedTuple):
    row: int
    col: int

    def is_valid(self) -> bool:
        return self.row >= 0 and self.col >= 0


INVALID_POSITION = Position(-1, -1)


def opponent_of(player: Player) -> Player:
    if player == Player.WHITE:
        return Player.BLACK
    if player == Player.BLACK:
        return Player.WHITE
    return Player.NONE


def is_queen(tile: TileContent) -> bool:
    return tile == TileContent.WHITE_QUEEN or tile == TileContent.BLACK_QUEEN


def tile_for_player(player: Player) -> TileContent:
    if player == Player.WHITE:
        return TileContent.WHITE_QUEEN
    if player == Player.BLACK:
        return TileContent.BLACK_QUEEN
    raise ValueError(f"No queen tile for {player!r}")


class Board:
    """Square grid of tiles stored row-major in a flat list.

    Accessors raise ``IndexError`` on out-of-bounds coordinates instead of
    clamping; callers that probe the edge use :meth:`is_inside` first.
    """

    __slots__ = ("dimension", "tiles")

    def __init__(self, dimension: int = BoardDimension.TEN) -> None:
        self.dimension = int(dimension)
        self.tiles: List[TileContent] = [TileContent.EMPTY] * (self.dimension * self.dimension)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.dimension == other.dimension and self.tiles == other.tiles

    def __repr__(self) -> str:
        return f"Board(dimension={self.dimension})"

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.dimension and 0 <= col < self.dimension

    def get(self, row: int, col: int) -> TileContent:
        return self.tiles[self._index(row, col)]

    def set(self, row: int, col: int, tile: TileContent) -> None:
        self.tiles[self._index(row, col)] = tile

    def clear(self, fill: TileContent = TileContent.EMPTY) -> None:
        self.tiles = [fill] * (self.dimension * self.dimension)

    def count(self, tile: TileContent) -> int:
        return self.tiles.count(tile)

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.dimension = self.dimension
        clone.tiles = list(self.tiles)
        return clone

    def _index(self, row: int, col: int) -> int:
        if not self.is_inside(row, col):
            raise IndexError(f"({row}, {col}) is outside a {self.dimension}x{self.dimension} board")
        return row * self.dimension + col
