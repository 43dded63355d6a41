"""
Move ordering heuristics for alpha-beta search.

Good move ordering is critical for alpha-beta pruning efficiency. Ordering
never changes the search result, only how quickly cutoffs are found.

Ordering priority (high to low):
1. Captures (tiger jumps)
2. Killer move (the last move that caused a cutoff at this depth)
3. Remaining moves in generation order
"""

from typing import Dict, List, Optional

from bagh_chal.game.types import Move


class MoveOrdering:
    """
    Move ordering heuristics for alpha-beta search.

    Maintains one killer slot per remaining search depth.
    """

    def __init__(self):
        self.killer_moves: Dict[int, Move] = {}

    def reset(self):
        """Reset killer moves for a new search."""
        self.killer_moves.clear()

    def update_killers(self, move: Move, depth: int):
        """
        Record the move that caused a cutoff at `depth`.

        The most recent cutoff wins: any previous killer at this depth is
        overwritten.
        """
        self.killer_moves[depth] = move

    def get_killer(self, depth: int) -> Optional[Move]:
        return self.killer_moves.get(depth)

    def order_moves(self, moves: List[Move], depth: int) -> List[Move]:
        """
        Order moves for alpha-beta pruning.

        Args:
            moves: Moves in generation order
            depth: Remaining search depth (selects the killer slot)

        Returns:
            New list: captures, then the killer, then the rest; ties keep
            generation order
        """
        killer = self.killer_moves.get(depth)

        def priority(move: Move) -> int:
            if move.is_capture:
                return 0
            if move == killer:
                return 1
            return 2

        # sorted() is stable, so generation order survives inside each group
        return sorted(moves, key=priority)
