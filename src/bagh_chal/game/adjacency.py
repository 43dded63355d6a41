"""
Static adjacency model for the 5x5 Bagh Chal board.

Every intersection connects orthogonally to its in-bounds neighbors.
Diagonal lines only pass through intersections where (row + col) is even:

    (0,0) . (0,2) . (0,4)
      . (1,1) . (1,3) .
    (2,0) . (2,2) . (2,4)
      . (3,1) . (3,3) .
    (4,0) . (4,2) . (4,4)

All tables are computed once at import time and never change.
"""

from typing import Optional, Tuple

import numpy as np


BOARD_WIDTH = 5
BOARD_SIZE = BOARD_WIDTH * BOARD_WIDTH

# Fixed neighbor order: up, down, left, right, then diagonals
ORTHOGONAL_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def rc_to_cell(row: int, col: int) -> int:
    return row * BOARD_WIDTH + col


def cell_to_rc(cell: int) -> Tuple[int, int]:
    return divmod(cell, BOARD_WIDTH)


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_WIDTH and 0 <= col < BOARD_WIDTH


def _directions(cell: int):
    row, col = cell_to_rc(cell)
    if (row + col) % 2 == 0:
        return ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS
    return ORTHOGONAL_DIRECTIONS


def _build_tables():
    neighbors = []
    jumps = []
    for cell in range(BOARD_SIZE):
        row, col = cell_to_rc(cell)
        cell_neighbors = []
        cell_jumps = []
        for dr, dc in _directions(cell):
            nr, nc = row + dr, col + dc
            if not _in_bounds(nr, nc):
                continue
            lr, lc = nr + dr, nc + dc
            landing = rc_to_cell(lr, lc) if _in_bounds(lr, lc) else None
            cell_neighbors.append(rc_to_cell(nr, nc))
            cell_jumps.append((rc_to_cell(nr, nc), landing))
        neighbors.append(tuple(cell_neighbors))
        jumps.append(tuple(cell_jumps))
    return tuple(neighbors), tuple(jumps)


# NEIGHBORS[cell] -> neighbor cells in fixed order
# JUMPS[cell] -> (neighbor, landing or None) pairs aligned with NEIGHBORS[cell]
NEIGHBORS, JUMPS = _build_tables()

ADJACENCY_MATRIX = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
for _cell, _cell_neighbors in enumerate(NEIGHBORS):
    ADJACENCY_MATRIX[_cell, list(_cell_neighbors)] = 1
ADJACENCY_MATRIX.setflags(write=False)


def neighbors(cell: int) -> Tuple[int, ...]:
    """Return the cells adjacent to `cell` in the fixed generation order."""
    return NEIGHBORS[cell]


def jump_landing(cell: int, neighbor: int) -> Optional[int]:
    """
    Return the landing cell for a jump from `cell` over `neighbor`.

    The landing cell continues the displacement cell -> neighbor by one more
    step. Returns None when it falls off the board.

    Raises:
        ValueError: if `neighbor` is not adjacent to `cell`
    """
    for over, landing in JUMPS[cell]:
        if over == neighbor:
            return landing
    raise ValueError(f"Cell {neighbor} is not adjacent to {cell}")
