"""
Alpha-beta search engine for Bagh Chal.

This module contains the engine components:
- Zobrist hashing for position fingerprints
- Transposition table for caching search results
- Killer move ordering
- Static evaluation
- Alpha-beta minimax search with iterative deepening
"""

from bagh_chal.engine.zobrist import ZobristHasher, get_zobrist_hasher
from bagh_chal.engine.transposition_table import TranspositionTable, BoundType, TTEntry, bound_for
from bagh_chal.engine.move_ordering import MoveOrdering
from bagh_chal.engine.evaluation import EvaluationWeights, Evaluator
from bagh_chal.engine.alphabeta import AlphaBetaEngine, SearchResult, SearchStateError

__all__ = [
    'ZobristHasher',
    'get_zobrist_hasher',
    'TranspositionTable',
    'BoundType',
    'TTEntry',
    'bound_for',
    'MoveOrdering',
    'EvaluationWeights',
    'Evaluator',
    'AlphaBetaEngine',
    'SearchResult',
    'SearchStateError',
]
