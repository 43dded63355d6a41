"""
Static evaluation for Bagh Chal positions.

Scores are always Tiger-relative: positive favours Tiger, negative favours
Goat. Evaluation does not depend on whose turn it is and has no side effects.

Terms:
- Material: goats captured (the Tiger win condition)
- Tiger mobility: each step to an empty neighbor counts 1, each available
  jump counts 2
- Trapped tigers: tigers with neither a step nor a jump
- Goat clustering: goat-goat adjacencies, counted once from each side; walls
  of goats are what eventually trap the tigers
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from bagh_chal.config_bagh_chal import EVALUATION_CONFIG
from bagh_chal.game.adjacency import ADJACENCY_MATRIX, BOARD_SIZE, JUMPS
from bagh_chal.game.types import Piece


@dataclass(frozen=True)
class EvaluationWeights:
    captured_weight: float = EVALUATION_CONFIG['captured_weight']
    mobility_weight: float = EVALUATION_CONFIG['mobility_weight']
    trapped_weight: float = EVALUATION_CONFIG['trapped_weight']
    clustering_weight: float = EVALUATION_CONFIG['clustering_weight']

    @classmethod
    def from_config(cls, config: Optional[dict] = None, **overrides) -> 'EvaluationWeights':
        """Build weights from EVALUATION_CONFIG, an optional dict and keyword overrides."""
        values = dict(EVALUATION_CONFIG)
        if config:
            values.update(config)
        values.update(overrides)
        return cls(**values)


def tiger_mobility(board: Sequence[int]) -> Tuple[int, int]:
    """
    Count tiger mobility and trapped tigers.

    Args:
        board: 25 cell values

    Returns:
        (mobility, trapped) where mobility counts 1 per step and 2 per jump
    """
    mobility = 0
    trapped = 0
    for cell in range(BOARD_SIZE):
        if board[cell] != Piece.TIGER:
            continue
        can_move = False
        for n, landing in JUMPS[cell]:
            if board[n] == Piece.EMPTY:
                mobility += 1
                can_move = True
            elif board[n] == Piece.GOAT and landing is not None and board[landing] == Piece.EMPTY:
                mobility += 2
                can_move = True
        if not can_move:
            trapped += 1
    return mobility, trapped


def goat_clustering(board: np.ndarray) -> int:
    """Number of ordered goat-goat adjacent pairs (each pair counts twice)."""
    goats = (np.asarray(board) == Piece.GOAT).astype(np.int32)
    return int(goats @ ADJACENCY_MATRIX @ goats)


class Evaluator:
    """
    Weighted static evaluation.

    Call with a game state, or use score() with a raw board and capture count.
    """

    def __init__(self, weights: Optional[EvaluationWeights] = None):
        self.weights = weights if weights is not None else EvaluationWeights()

    def __call__(self, game) -> float:
        return self.score(game.board, game.goats_captured)

    def score(self, board: np.ndarray, goats_captured: int) -> float:
        """
        Evaluate a board.

        Args:
            board: 25 cell values (numpy array)
            goats_captured: Goats captured so far

        Returns:
            Tiger-relative score
        """
        w = self.weights
        board = np.asarray(board)
        mobility, trapped = tiger_mobility(board.tolist())

        return (
            goats_captured * w.captured_weight
            + mobility * w.mobility_weight
            - trapped * w.trapped_weight
            - goat_clustering(board) * w.clustering_weight
        )

    def breakdown(self, board: np.ndarray, goats_captured: int) -> dict:
        """Per-term contributions, for tuning and debugging."""
        w = self.weights
        board = np.asarray(board)
        mobility, trapped = tiger_mobility(board.tolist())
        clustering = goat_clustering(board)
        return {
            'captured': goats_captured * w.captured_weight,
            'mobility': mobility * w.mobility_weight,
            'trapped': -trapped * w.trapped_weight,
            'clustering': -clustering * w.clustering_weight,
        }
