"""
Transposition table for caching alpha-beta search results.

The transposition table stores previously computed positions to avoid redundant
work during alpha-beta search. Iterative deepening benefits most: positions
reached by different move orders are searched once per depth.

Key concepts:
- Bound types: EXACT (PV node), LOWER (fail-high/beta cutoff), UPPER (fail-low/alpha cutoff)
- Replacement policy: always replace, no aging
- Keyed by the full 64-bit fingerprint; the stored entry is not checked
  against the actual board, so a fingerprint collision returns the other
  position's entry
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class BoundType(Enum):
    """Type of bound stored in transposition table entry."""
    EXACT = 0   # Exact value (PV node, searched with full window)
    LOWER = 1   # Lower bound (beta cutoff, actual value >= stored value)
    UPPER = 2   # Upper bound (alpha cutoff, actual value <= stored value)


@dataclass
class TTEntry:
    """
    Transposition table entry storing cached search results.

    Attributes:
        depth: Search depth when this entry was stored
        score: Evaluation score (or bound), Tiger-relative
        bound: Type of bound (EXACT/LOWER/UPPER)
        best_move: Best move found at this position (None at leaves)
    """
    depth: int
    score: float
    bound: BoundType
    best_move: Optional[Any]


def bound_for(score: float, alpha: float, beta: float) -> BoundType:
    """
    Classify a node's final score against the window it was searched with.

    Args:
        score: Final node value
        alpha: Alpha the node's move loop started from
        beta: Beta the node's move loop started from
    """
    if score <= alpha:
        return BoundType.UPPER
    if score >= beta:
        return BoundType.LOWER
    return BoundType.EXACT


class TranspositionTable:
    """
    Fingerprint -> TTEntry map.

    Bagh Chal positions reachable inside one timed search fit comfortably in
    a dict, so there is no fixed slot array and no index masking.
    """

    def __init__(self):
        self.table: Dict[int, TTEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self):
        return len(self.table)

    def probe(
        self,
        zobrist_hash: int,
        depth: int,
        alpha: float,
        beta: float
    ) -> Tuple[Optional[float], Optional[Any], float, float]:
        """
        Probe transposition table for a cached result.

        An entry is only used if it was searched at least as deep as the
        query. EXACT entries return immediately. LOWER entries may raise
        alpha, UPPER entries may lower beta; if the window closes the stored
        score is returned.

        Args:
            zobrist_hash: Position hash
            depth: Current search depth
            alpha: Current alpha bound
            beta: Current beta bound

        Returns:
            (score, best_move, alpha, beta): score is None when the caller
            must search, alpha/beta are the possibly tightened window
        """
        entry = self.table.get(zobrist_hash)

        if entry is None or entry.depth < depth:
            self.misses += 1
            return None, None, alpha, beta

        if entry.bound == BoundType.EXACT:
            self.hits += 1
            return entry.score, entry.best_move, alpha, beta

        if entry.bound == BoundType.LOWER and entry.score > alpha:
            alpha = entry.score
        elif entry.bound == BoundType.UPPER and entry.score < beta:
            beta = entry.score

        if alpha >= beta:
            self.hits += 1
            return entry.score, entry.best_move, alpha, beta

        self.misses += 1
        return None, None, alpha, beta

    def store(
        self,
        zobrist_hash: int,
        depth: int,
        score: float,
        bound: BoundType,
        best_move: Optional[Any]
    ):
        """
        Store search result in transposition table (always replace).

        Args:
            zobrist_hash: Position hash
            depth: Search depth
            score: Evaluation or bound
            bound: Type of bound
            best_move: Best move found (None at leaves)
        """
        self.table[zobrist_hash] = TTEntry(depth=depth, score=score, bound=bound, best_move=best_move)
        self.stores += 1

    def get(self, zobrist_hash: int) -> Optional[TTEntry]:
        return self.table.get(zobrist_hash)

    def clear(self):
        """Clear all entries (done at the start of every root search)."""
        self.table.clear()
        self._reset_stats()

    def _reset_stats(self):
        """Reset statistics counters."""
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        """
        Get transposition table statistics.

        Returns:
            Dictionary with hits, misses, hit rate, stores and size
        """
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'stores': self.stores,
            'size_entries': len(self.table),
        }
