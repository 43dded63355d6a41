"""
Unit tests for the static evaluation.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from bagh_chal.game import BaghChal, Piece
from bagh_chal.engine.evaluation import EvaluationWeights, Evaluator, goat_clustering, tiger_mobility


TRAPPED = (
    "TGGGT"
    "GG.GG"
    "G.G.G"
    "GG.GG"
    "TGGGT"
)


class TestTerms:

    def test_initial_mobility(self):
        game = BaghChal()
        assert tiger_mobility(game.board.tolist()) == (12, 0)

    def test_jump_counts_double(self):
        game = BaghChal.from_position("TG..T" "....." "....." "....." "T...T")
        assert tiger_mobility(game.board.tolist()) == (13, 0)

    def test_trapped(self):
        game = BaghChal.from_position(TRAPPED)
        assert tiger_mobility(game.board.tolist()) == (0, 4)

    def test_clustering_counts_each_side(self):
        game = BaghChal.from_position("TGG.T" "....." "....." "....." "T...T")
        assert goat_clustering(game.board) == 2

    def test_clustering_uses_diagonals(self):
        game = BaghChal.from_position("T...T" "....." "..G.." "...G." "T...T")
        assert goat_clustering(game.board) == 2

    def test_odd_cells_have_no_diagonal(self):
        game = BaghChal.from_position("T...T" "..G.." ".G..." "....." "T...T")
        assert goat_clustering(game.board) == 0


class TestEvaluator:

    def test_initial_score(self):
        assert Evaluator()(BaghChal()) == 240

    def test_custom_weights(self):
        weights = EvaluationWeights.from_config(mobility_weight=1, clustering_weight=0)
        assert Evaluator(weights)(BaghChal()) == 12
        assert weights.captured_weight == EvaluationWeights().captured_weight

    def test_accepts_plain_lists(self):
        board = BaghChal().board.tolist()
        assert Evaluator().score(board, goats_captured=1) == 240 + 2000

    def test_breakdown_trapped(self):
        game = BaghChal.from_position(TRAPPED)
        terms = Evaluator().breakdown(game.board, game.goats_captured)

        assert terms['mobility'] == 0
        assert terms['trapped'] == -2000
        assert sum(terms.values()) == Evaluator()(game)

    def test_independent_of_turn(self):
        cells = "TG..T" "..G.." "....." "....." "T...T"
        goat = BaghChal.from_position(cells, turn=Piece.GOAT)
        tiger = BaghChal.from_position(cells, turn=Piece.TIGER)
        assert Evaluator()(goat) == Evaluator()(tiger)
