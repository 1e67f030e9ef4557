"""Move generation, legality and move application.

Queens and arrows both travel like a chess queen: any distance along one of
the eight compass/diagonal lines, stopping before the first occupied tile or
the board edge.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .board import Board, Player, Position, TileContent, opponent_of, tile_for_player
from .errors import IllegalMoveError
from .state import GameState, Move

Direction = Tuple[int, int]

# Fixed order keeps move enumeration deterministic.
DIRECTIONS: Tuple[Direction, ...] = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (1, -1), (-1, 1), (-1, -1),
)


def ray_cast(board: Board, start: Position, direction: Direction) -> List[Position]:
    """Empty tiles from ``start`` (exclusive) up to the first blocker or edge."""
    tiles: List[Position] = []
    if not board.is_inside(start.row, start.col):
        return tiles

    d_row, d_col = direction
    row, col = start.row + d_row, start.col + d_col
    while board.is_inside(row, col):
        if board.get(row, col) != TileContent.EMPTY:
            break
        tiles.append(Position(row, col))
        row += d_row
        col += d_col
    return tiles


def gather_reachable_tiles(board: Board, start: Position) -> List[Position]:
    reachable: List[Position] = []
    for direction in DIRECTIONS:
        reachable.extend(ray_cast(board, start, direction))
    return reachable


def simulate_queen_move(board: Board, origin: Position, destination: Position, tile: TileContent) -> Board:
    """Copy of ``board`` with the queen lifted from ``origin`` and set on ``destination``."""
    simulated = board.copy()
    simulated.set(origin.row, origin.col, TileContent.EMPTY)
    simulated.set(destination.row, destination.col, tile)
    return simulated


def generate_moves_for_player(
    state: GameState, player: Player, move_cap: Optional[int] = None
) -> List[Move]:
    """All legal moves of ``player``, truncated once ``move_cap`` are found.

    Order is queen-list order, then destination order, then arrow order.
    """
    moves: List[Move] = []
    if player == Player.NONE:
        return moves
    if move_cap is not None and move_cap <= 0:
        return moves

    board = state.board
    tile = tile_for_player(player)
    for origin in state.queen_positions(player):
        for destination in gather_reachable_tiles(board, origin):
            simulated = simulate_queen_move(board, origin, destination, tile)
            for arrow in gather_reachable_tiles(simulated, destination):
                moves.append(Move(player, origin, destination, arrow))
                if move_cap is not None and len(moves) >= move_cap:
                    return moves
    return moves


def has_any_legal_move(state: GameState, player: Player) -> bool:
    return bool(generate_moves_for_player(state, player, move_cap=1))


def queen_destinations(state: GameState, origin: Position) -> List[Position]:
    """Tiles the queen on ``origin`` may move to; empty if there is no queen there."""
    board = state.board
    if not board.is_inside(origin.row, origin.col):
        return []
    if board.get(origin.row, origin.col) not in (TileContent.WHITE_QUEEN, TileContent.BLACK_QUEEN):
        return []
    return gather_reachable_tiles(board, origin)


def arrow_targets(state: GameState, origin: Position, destination: Position) -> List[Position]:
    """Arrow tiles available after the queen on ``origin`` lands on ``destination``."""
    if destination not in queen_destinations(state, origin):
        return []
    tile = state.board.get(origin.row, origin.col)
    simulated = simulate_queen_move(state.board, origin, destination, tile)
    return gather_reachable_tiles(simulated, destination)


def is_move_legal(state: GameState, move: Move) -> bool:
    if state.is_finished:
        return False
    if move.player != state.current_player or move.player == Player.NONE:
        return False

    board = state.board
    for position in (move.queen_from, move.queen_to, move.arrow):
        if not board.is_inside(position.row, position.col):
            return False

    tile = tile_for_player(move.player)
    if board.get(move.queen_from.row, move.queen_from.col) != tile:
        return False
    if move.queen_to not in gather_reachable_tiles(board, move.queen_from):
        return False

    # The vacated origin is open for the arrow, so validate on the moved board.
    simulated = simulate_queen_move(board, move.queen_from, move.queen_to, tile)
    return move.arrow in gather_reachable_tiles(simulated, move.queen_to)


def evaluate_win_state(state: GameState) -> bool:
    """Finish the game if the side to move is stuck; returns whether it is over."""
    if state.is_finished:
        return True
    current = state.current_player
    if not has_any_legal_move(state, current):
        state.mark_finished(opponent_of(current))
        return True
    return False


def apply_move(state: GameState, move: Move, validate: bool = True) -> None:
    """Play ``move`` on ``state`` in place.

    An illegal move raises :class:`IllegalMoveError` before anything is
    touched. ``validate=False`` is reserved for moves taken straight from
    :func:`generate_moves_for_player` on this same state.
    """
    if validate and not is_move_legal(state, move):
        raise IllegalMoveError(
            "Illegal move",
            context={
                "player": move.player.label,
                "from": tuple(move.queen_from),
                "to": tuple(move.queen_to),
                "arrow": tuple(move.arrow),
            },
        )

    state.relocate_queen(move.player, move.queen_from, move.queen_to)
    state.place_arrow(move.arrow)
    state.record_move(move)
    state.current_player = opponent_of(move.player)
    evaluate_win_state(state)
