"""
Board Rules

Pure functions over a battle grid (a list of rows of CellState values):
random generation, bounds checks, guess resolution and win detection.
Nothing here touches the database; see app.services.battles for the
persisted operations.

"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from app.models.battle import CellState

Matrix = List[List[int]]


def populate(size: int, rng: Optional[random.Random] = None) -> Matrix:
    """
    Build a size x size grid with one ship per row.

    Each row picks its ship column independently, so several rows may
    carry their ship in the same column.
    """
    rng = rng or random
    matrix: Matrix = []
    for _ in range(size):
        row = [int(CellState.EMPTY)] * size
        row[rng.randrange(size)] = int(CellState.SHIP)
        matrix.append(row)
    return matrix


def in_bounds(matrix: Sequence[Sequence[int]], row: int, col: int) -> bool:
    if row < 0 or row >= len(matrix):
        return False
    return 0 <= col < len(matrix[row])


def apply_guess(matrix: Sequence[Sequence[int]], row: int, col: int) -> Tuple[bool, Matrix]:
    """
    Resolve a guess at (row, col) against an in-bounds cell.

    Returns (is_hit, new_matrix). The input grid is not modified.
    A cell that was already hit reports a hit again; a missed cell
    reports a miss again.
    """
    cell = matrix[row][col]
    is_hit = cell in (CellState.SHIP, CellState.HIT)

    new_matrix = [list(r) for r in matrix]
    new_matrix[row][col] = int(CellState.HIT if is_hit else CellState.MISS)
    return is_hit, new_matrix


def ships_remaining(matrix: Sequence[Sequence[int]]) -> int:
    return sum(1 for r in matrix for c in r if c == CellState.SHIP)


def all_ships_sunk(matrix: Sequence[Sequence[int]]) -> bool:
    return ships_remaining(matrix) == 0


def masked_matrix(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Player view of the grid: unsunk ships look like empty water."""
    return [
        [int(CellState.EMPTY) if c == CellState.SHIP else int(c) for c in r]
        for r in matrix
    ]
