# Game module

from .types import Move, MoveType, Phase, Piece
from .adjacency import BOARD_SIZE, BOARD_WIDTH, cell_to_rc, jump_landing, neighbors, rc_to_cell
from .bagh_chal import BaghChal, GameResult, IllegalMoveError, IllegalPositionError

__all__ = [
    'Move', 'MoveType', 'Phase', 'Piece',
    'BOARD_SIZE', 'BOARD_WIDTH', 'cell_to_rc', 'jump_landing', 'neighbors', 'rc_to_cell',
    'BaghChal', 'GameResult', 'IllegalMoveError', 'IllegalPositionError',
]
