"""
Zobrist hashing for Bagh Chal positions.

Zobrist hashing gives every position a 64-bit fingerprint used to key the
transposition table. The fingerprint can be updated incrementally after each
move, which keeps make/undo cheap during alpha-beta search.

Implementation:
- Pre-generate random 64-bit keys for each (cell, piece) combination,
  including EMPTY, so every cell contributes to the hash
- One key XORed in when Tiger is to move
- One key per goats-placed count (0..20): identical boards with a different
  number of goats in hand are different positions
- Hash = XOR of all of the above
"""

from typing import Optional, Sequence

import numpy as np

from bagh_chal.config_bagh_chal import ZOBRIST_CONFIG


# Kept local so this module has no import-time dependency on the game package
_BOARD_SIZE = 25
_PIECE_KINDS = 3      # EMPTY, TIGER, GOAT
_TIGER = 1
_TOTAL_GOATS = 20


class ZobristHasher:
    """
    Zobrist hashing for Bagh Chal board positions.

    Bagh Chal board: 25 cells × 3 piece kinds = 75 cell keys, plus one
    side-to-move key and 21 placement-count keys.

    The key tables are plain Python ints generated once from a seeded numpy
    RNG and never modified afterwards.
    """

    def __init__(self, seed: int = 42):
        """
        Initialize Zobrist key tables.

        Args:
            seed: Random seed for reproducibility
        """
        rng = np.random.RandomState(seed)
        high = np.iinfo(np.uint64).max

        # cell_keys[cell][piece]
        cell_keys = rng.randint(0, high, size=(_BOARD_SIZE, _PIECE_KINDS), dtype=np.uint64)
        placed_keys = rng.randint(0, high, size=_TOTAL_GOATS + 1, dtype=np.uint64)
        tiger_to_move = rng.randint(0, high, dtype=np.uint64)

        # Tuples of Python ints: immutable, and XOR never mixes numpy and int types
        self.cell_keys = tuple(tuple(row) for row in cell_keys.tolist())
        self.placed_keys = tuple(placed_keys.tolist())
        self.tiger_to_move_key = int(tiger_to_move)

    def hash_position(self, board: Sequence[int], turn: int, goats_placed: int) -> int:
        """
        Compute the Zobrist hash of a position from scratch.

        Args:
            board: 25 cell values (0=empty, 1=tiger, 2=goat)
            turn: Side to move (1=tiger, 2=goat)
            goats_placed: Number of goats placed so far (0..20)

        Returns:
            64-bit hash value (int)
        """
        hash_value = 0
        for cell, piece in enumerate(board):
            hash_value ^= self.cell_keys[cell][int(piece)]

        if turn == _TIGER:
            hash_value ^= self.tiger_to_move_key
        hash_value ^= self.placed_keys[goats_placed]

        return hash_value

    def toggle_cell(self, current_hash: int, cell: int, old_piece: int, new_piece: int) -> int:
        """XOR out the old contents of `cell` and XOR in the new contents."""
        return current_hash ^ self.cell_keys[cell][old_piece] ^ self.cell_keys[cell][new_piece]

    def toggle_turn(self, current_hash: int) -> int:
        """Flip the side-to-move component (XOR is its own inverse)."""
        return current_hash ^ self.tiger_to_move_key

    def toggle_placed(self, current_hash: int, old_count: int, new_count: int) -> int:
        """Replace the placement-count component."""
        return current_hash ^ self.placed_keys[old_count] ^ self.placed_keys[new_count]


# Global singleton instance
_global_hasher: Optional[ZobristHasher] = None


def get_zobrist_hasher(seed: Optional[int] = None) -> ZobristHasher:
    """
    Get or create the global Zobrist hasher singleton.

    All game states and engines in a process share this table, so
    fingerprints stay consistent for the lifetime of the process. The seed is
    only honoured on first creation.

    Args:
        seed: Random seed (defaults to ZOBRIST_CONFIG['seed'])

    Returns:
        ZobristHasher instance
    """
    global _global_hasher

    if _global_hasher is None:
        _global_hasher = ZobristHasher(ZOBRIST_CONFIG['seed'] if seed is None else seed)

    return _global_hasher
