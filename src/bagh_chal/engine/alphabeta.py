"""
Alpha-beta minimax search engine for Bagh Chal.

Scores are Tiger-relative throughout: Tiger maximizes, Goat minimizes. The
role of a node is read from the side to move at that node, so it flips once
per ply without being passed down.

Key features:
- Alpha-beta pruning (cut branches that can't affect final result)
- Iterative deepening (search depth 1, then 2, then 3... up to a
  phase-dependent target depth)
- Transposition table integration
- Killer-move ordering
- Time management (polled every `check_interval` nodes, stop cleanly when
  the budget is exhausted)

The search mutates the live game state in place. Every move is applied
through BaghChal.applied(), which undoes it in a finally block, so the state
is restored on normal return, on cutoffs and on cancellation.

Algorithm overview:

    def alpha_beta(depth, alpha, beta):
        if time is up: set stopped and return

        if tt_entry := tt.probe(state, depth, alpha, beta):
            return tt_entry.score

        if terminal: return WIN + depth or LOSS - depth
        if depth == 0: return static_eval(state)

        for move in ordered_moves:
            with state.applied(move):
                score = alpha_beta(depth - 1, alpha, beta)
            if stopped: return
            best = max(best, score) if tiger else min(best, score)
            update alpha (tiger) or beta (goat)
            if alpha >= beta:
                record killer; break

        tt.store(state, depth, best, bound_type, best_move)
        return best
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from bagh_chal.config_bagh_chal import SEARCH_CONFIG
from bagh_chal.engine.evaluation import EvaluationWeights, Evaluator
from bagh_chal.engine.move_ordering import MoveOrdering
from bagh_chal.engine.transposition_table import TranspositionTable, bound_for
from bagh_chal.game.types import Move, Piece

if TYPE_CHECKING:
    from bagh_chal.game.bagh_chal import BaghChal

logger = logging.getLogger(__name__)


# Sentinel values for win/loss (Tiger-relative)
SCORE_WIN = 100000
SCORE_LOSS = -100000
SCORE_INF = float('inf')

TOTAL_GOATS = 20
GOATS_TO_WIN = 5


class SearchStateError(RuntimeError):
    """The game state was not restored to its pre-search value."""


@dataclass
class SearchResult:
    """Result of alpha-beta search."""
    best_move: Optional[Move]
    score: float
    depth_reached: int
    target_depth: int
    nodes_searched: int
    time_ms: int
    stopped: bool = False
    tt_stats: dict = field(default_factory=dict)


class AlphaBetaEngine:
    """
    Iterative-deepening alpha-beta engine for the side to move.

    The engine holds a reference to the live game state and owns it for the
    duration of each search() call.
    """

    def __init__(
        self,
        game: 'BaghChal',
        evaluator: Optional[Evaluator] = None,
        weights: Optional[EvaluationWeights] = None,
        check_interval: Optional[int] = None,
        use_transposition_table: bool = True,
        use_killer_moves: bool = True,
        config: Optional[dict] = None,
    ):
        """
        Initialize alpha-beta engine.

        Args:
            game: Live game state to search from
            evaluator: Leaf evaluator (defaults to Evaluator(weights))
            weights: Evaluation weights, ignored when an evaluator is given
            check_interval: Poll the clock every N nodes
            use_transposition_table: Enable TT probing and storing
            use_killer_moves: Enable killer move ordering
            config: Overrides for SEARCH_CONFIG keys
        """
        self.game = game
        self.config = {**SEARCH_CONFIG, **(config or {})}
        self.evaluator = evaluator if evaluator is not None else Evaluator(weights)
        self.check_interval = check_interval or self.config['check_interval']

        self.tt = TranspositionTable()
        self.move_ordering = MoveOrdering()
        self.use_transposition_table = use_transposition_table
        self.use_killer_moves = use_killer_moves

        # Search statistics
        self.nodes_searched = 0
        self.start_time = 0.0
        self.time_limit_ms = 0
        self.stopped = False

    def target_depth(self) -> int:
        """Phase-dependent iterative deepening target."""
        if self.game.goats_placed < TOTAL_GOATS:
            return self.config['placement_depth']
        if self.game.goats_captured < self.config['endgame_captures']:
            return self.config['movement_depth']
        return self.config['endgame_depth']

    def best_move(self, time_limit_ms: Optional[int] = None) -> Optional[Move]:
        """Best move for the side to move, or None if there is none."""
        return self.search(time_limit_ms).best_move

    def search(self, time_limit_ms: Optional[int] = None, max_depth: Optional[int] = None) -> SearchResult:
        """
        Main search entry point with iterative deepening.

        Strategy:
        - Search depth 1, 2, ... up to the target depth
        - Always keep the best move from the last completed depth
        - Stop early on a proven win for the side to move, or when an
          iteration finishes past the time budget
        - A cancelled iteration is discarded; if depth 1 itself was
          cancelled the first move in capture/killer order is returned, so
          a position with legal moves always yields one

        Args:
            time_limit_ms: Time budget in milliseconds (non-positive = no limit)
            max_depth: Override the phase-dependent target depth

        Returns:
            SearchResult with best move, score, statistics
        """
        game = self.game
        self.start_time = time.monotonic() * 1000
        self.time_limit_ms = self.config['time_limit_ms'] if time_limit_ms is None else time_limit_ms
        self.stopped = False
        self.nodes_searched = 0

        self.tt.clear()
        self.move_ordering.reset()

        target = max_depth if max_depth is not None else self.target_depth()
        side = game.turn
        entry_fingerprint = game.fingerprint
        entry_history = len(game.history)

        if game.is_over() or not game.legal_moves(side):
            logger.warning("Search requested with no legal move for %s", side.name)
            return SearchResult(
                best_move=None,
                score=0,
                depth_reached=0,
                target_depth=target,
                nodes_searched=0,
                time_ms=0,
                tt_stats=self.tt.get_stats(),
            )

        logger.info(
            "Starting search. Phase: %s. Target depth: %d. Budget: %sms",
            game.phase.name.lower(), target, self.time_limit_ms,
        )

        best_move = None
        best_score = 0
        depth_reached = 0

        for depth in range(1, target + 1):
            score, move = self.alpha_beta(depth, -SCORE_INF, SCORE_INF)

            if self.stopped:
                logger.debug("Depth %d cancelled after %d nodes", depth, self.nodes_searched)
                break

            if move is not None:
                best_move = move
                best_score = score
                depth_reached = depth

            logger.debug(
                "Depth %d: score %s, move %s, nodes %d",
                depth, score, move, self.nodes_searched,
            )

            if self._is_proven_win(score, side):
                break
            if self._time_up():
                break

        if best_move is None:
            # Not even depth 1 completed: fall back to the first ordered move
            best_move = self.move_ordering.order_moves(game.legal_moves(side), 1)[0]

        self._check_restored(entry_fingerprint, entry_history)

        elapsed_ms = int(time.monotonic() * 1000 - self.start_time)
        logger.info(
            "Search done: move %s, score %s, depth %d/%d, %d nodes in %dms",
            best_move, best_score, depth_reached, target, self.nodes_searched, elapsed_ms,
        )

        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth_reached=depth_reached,
            target_depth=target,
            nodes_searched=self.nodes_searched,
            time_ms=elapsed_ms,
            stopped=self.stopped,
            tt_stats=self.tt.get_stats(),
        )

    def alpha_beta(self, depth: int, alpha: float, beta: float) -> Tuple[float, Optional[Move]]:
        """
        Alpha-beta minimax search from the live state.

        Args:
            depth: Remaining depth
            alpha: Lower bound (best Tiger can already force)
            beta: Upper bound (best Goat can already force)

        Returns:
            (score, best_move), Tiger-relative. Meaningless once `stopped`
            is set; callers must check the flag.
        """
        game = self.game

        if self.nodes_searched % self.check_interval == 0 and self._time_up():
            self.stopped = True
        self.nodes_searched += 1
        if self.stopped:
            return 0, None

        # Probe transposition table
        hash_val = game.fingerprint
        if self.use_transposition_table:
            tt_score, tt_move, alpha, beta = self.tt.probe(hash_val, depth, alpha, beta)
            if tt_score is not None:
                return tt_score, tt_move

        # Terminal check, same order as BaghChal.get_result()
        side = game.turn
        if game.goats_captured >= GOATS_TO_WIN:
            return SCORE_WIN + depth, None

        moves = None
        if side == Piece.TIGER:
            moves = game.legal_moves(side)
            if not moves:
                return SCORE_LOSS - depth, None

        if depth == 0:
            return self.evaluator(game), None

        if moves is None:
            moves = game.legal_moves(side)
        if not moves:
            # Blocked goats do not end the game; score the position statically
            return self.evaluator(game), None

        if self.use_killer_moves:
            moves = self.move_ordering.order_moves(moves, depth)
        else:
            moves = sorted(moves, key=lambda m: not m.is_capture)

        maximizing = side == Piece.TIGER
        best_score = -SCORE_INF if maximizing else SCORE_INF
        best_move = None
        cutoff_move = None
        window_alpha, window_beta = alpha, beta

        for move in moves:
            with game.applied(move):
                score, _ = self.alpha_beta(depth - 1, alpha, beta)

            if self.stopped:
                return 0, None

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)

            if alpha >= beta:
                cutoff_move = move
                break

        if self.use_transposition_table:
            bound = bound_for(best_score, window_alpha, window_beta)
            self.tt.store(hash_val, depth, best_score, bound, best_move)

        if cutoff_move is not None and self.use_killer_moves:
            self.move_ordering.update_killers(cutoff_move, depth)

        return best_score, best_move

    def minimax(self, depth: int) -> float:
        """
        Exhaustive minimax without pruning, tables or time checks.

        Uses the same terminal and leaf scoring as alpha_beta(); intended as
        a reference for verifying the pruned search on small positions.
        """
        game = self.game
        side = game.turn
        if game.goats_captured >= GOATS_TO_WIN:
            return SCORE_WIN + depth

        moves = game.legal_moves(side)
        if side == Piece.TIGER and not moves:
            return SCORE_LOSS - depth
        if depth == 0 or not moves:
            return self.evaluator(game)

        scores: List[float] = []
        for move in moves:
            with game.applied(move):
                scores.append(self.minimax(depth - 1))

        return max(scores) if side == Piece.TIGER else min(scores)

    def _is_proven_win(self, score: float, side: Piece) -> bool:
        if side == Piece.TIGER:
            return score >= SCORE_WIN
        return score <= SCORE_LOSS

    def _time_up(self) -> bool:
        """Check if time limit exceeded."""
        if self.time_limit_ms <= 0:
            return False

        elapsed_ms = time.monotonic() * 1000 - self.start_time
        return elapsed_ms >= self.time_limit_ms

    def _check_restored(self, fingerprint: int, history_length: int):
        game = self.game
        if game.fingerprint != fingerprint or len(game.history) != history_length:
            logger.error(
                "Game state changed during search: fingerprint %x -> %x, history %d -> %d",
                fingerprint, game.fingerprint, history_length, len(game.history),
            )
            raise SearchStateError("Search did not restore the game state")
