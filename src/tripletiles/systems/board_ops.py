from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

from esper import World

from tripletiles.components.board import Board, Position
from tripletiles.components.tile import PALETTE, Tile, TileColor
from tripletiles.config import GameConfig
from tripletiles.constants import CONTAINER_SIZE, GRID_SIZE_MAX, GRID_SIZE_MIN, LEVELS_PER_GRID_STEP

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color: TileColor


def grid_size(level: int) -> int:
    """Edge length of the grid: 8 up to level 10, +1 per decade, capped at 17."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    step = (level - 1) // LEVELS_PER_GRID_STEP
    return min(GRID_SIZE_MIN + step, GRID_SIZE_MAX)


def tile_size(level: int, container_size: int = CONTAINER_SIZE) -> int:
    return container_size // grid_size(level)


def palette_for(config: GameConfig) -> Tuple[TileColor, ...]:
    return PALETTE[: config.palette_size]


def random_tile(rng: random.Random, palette: Sequence[TileColor] = PALETTE, *, is_new: bool = False) -> Tile:
    return Tile(color=rng.choice(palette), is_new=is_new)


def create_board(level: int, rng: random.Random, palette: Sequence[TileColor] = PALETTE) -> Board:
    """Allocate a fully populated board for ``level``.

    Colors are drawn uniformly; pre-existing triples are allowed.
    """
    size = grid_size(level)
    tiles = [[random_tile(rng, palette) for _ in range(size)] for _ in range(size)]
    return Board(size=size, tiles=tiles, level=level)


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def is_valid_position(board: Board, position: Position) -> bool:
    try:
        row, col = position
    except (TypeError, ValueError):
        return False
    if not isinstance(row, int) or not isinstance(col, int):
        return False
    return 0 <= row < board.size and 0 <= col < board.size


def tile_at(board: Board, position: Position) -> Tile:
    if not is_valid_position(board, position):
        raise ValueError(f"Position {position!r} outside {board.size}x{board.size} board")
    row, col = position
    return board.tiles[row][col]


def colors_match(board: Board, positions: Iterable[Position]) -> bool:
    colors = {tile_at(board, pos).color for pos in positions}
    return len(colors) == 1


def mark_removing(board: Board, positions: Iterable[Position]) -> List[Position]:
    marked: List[Position] = []
    for pos in positions:
        tile = tile_at(board, pos)
        if tile.is_removing:
            continue
        tile.is_removing = True
        marked.append(pos)
    return marked


def removing_positions(board: Board) -> List[Position]:
    return [
        (row, col)
        for row in range(board.size)
        for col in range(board.size)
        if board.tiles[row][col].is_removing
    ]


def collapse_columns(
    board: Board,
    rng: random.Random,
    palette: Sequence[TileColor] = PALETTE,
) -> Tuple[List[GravityMove], List[Position]]:
    """Drop surviving tiles in every column that holds removing tiles, then refill.

    Survivors keep their relative order and settle at the bottom. Vacated rows
    at the top receive fresh tiles flagged ``is_new``, generated bottom-up, one
    column at a time in ascending column order.
    """
    columns = sorted({col for _, col in removing_positions(board)})
    moves: List[GravityMove] = []
    spawned: List[Position] = []
    for col in columns:
        pointer = board.size - 1
        for row in range(board.size - 1, -1, -1):
            tile = board.tiles[row][col]
            if tile.is_removing:
                continue
            if pointer != row:
                board.tiles[pointer][col] = replace(tile, is_new=False)
                moves.append(GravityMove(source=(row, col), target=(pointer, col), color=tile.color))
            pointer -= 1
        while pointer >= 0:
            board.tiles[pointer][col] = random_tile(rng, palette, is_new=True)
            spawned.append((pointer, col))
            pointer -= 1
    return moves, spawned


def settle_board(board: Board) -> None:
    for row in board.tiles:
        for tile in row:
            tile.is_new = False
            tile.is_removing = False


def check_board_integrity(board: Board) -> List[str]:
    """Return human-readable shape problems (empty when the board is sound)."""
    problems: List[str] = []
    if len(board.tiles) != board.size:
        problems.append(f"expected {board.size} rows, found {len(board.tiles)}")
    for row_index, row in enumerate(board.tiles):
        if len(row) != board.size:
            problems.append(f"row {row_index} has {len(row)} cells, expected {board.size}")
        for col_index, tile in enumerate(row):
            if not isinstance(tile, Tile):
                problems.append(f"cell ({row_index}, {col_index}) holds no tile")
    return problems


def repair_board(board: Board, rng: random.Random, palette: Sequence[TileColor] = PALETTE) -> List[Position]:
    """Fill holes and fix ragged rows in place; returns the repaired positions."""
    problems = check_board_integrity(board)
    if not problems:
        return []
    logger.warning("Board integrity violated, repairing: %s", "; ".join(problems))
    repaired: List[Position] = []
    del board.tiles[board.size:]
    while len(board.tiles) < board.size:
        board.tiles.append([])
    for row_index, row in enumerate(board.tiles):
        del row[board.size:]
        while len(row) < board.size:
            row.append(None)  # type: ignore[arg-type]
        for col_index, tile in enumerate(row):
            if not isinstance(tile, Tile):
                row[col_index] = random_tile(rng, palette)
                repaired.append((row_index, col_index))
    return repaired
