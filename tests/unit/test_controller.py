"""
Unit tests for the headless game controller.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from bagh_chal.controller import Feedback, GameController
from bagh_chal.engine.alphabeta import AlphaBetaEngine
from bagh_chal.game import BaghChal, MoveType, Phase, Piece


MOVEMENT = (
    "TGGGT"
    "GG.GG"
    "GG.GG"
    "GG.GG"
    "TGGGT"
)

TRAPPED = (
    "TGGGT"
    "GG.GG"
    "G.G.G"
    "GG.GG"
    "TGGGT"
)

CAPTURE_TO_WIN = (
    "TG.GT"
    "GGGGG"
    "G.G.G"
    "GG.GG"
    "TGG.T"
)


def load(controller, game):
    controller.game = game
    controller.engine = AlphaBetaEngine(game)
    controller.selected = None


class TestPlacement:

    def test_defaults(self):
        controller = GameController()
        assert controller.human_side == Piece.GOAT
        assert controller.ai_side == Piece.TIGER
        assert controller.status().phase is Phase.PLACEMENT

    def test_place_on_tiger_is_invalid(self):
        controller = GameController()
        assert controller.select_cell(0) is Feedback.INVALID
        assert controller.game.history == []
        assert controller.game.turn == Piece.GOAT

    def test_place_goat(self):
        controller = GameController()
        assert controller.select_cell(12) is Feedback.PLACED

        status = controller.status()
        assert status.turn == Piece.TIGER
        assert status.goats_placed == 1
        assert controller.game.piece_at(12) == Piece.GOAT

    def test_not_your_turn(self):
        controller = GameController()
        controller.select_cell(12)

        assert controller.select_cell(7) is Feedback.NOT_YOUR_TURN
        assert controller.game.goats_placed == 1

    def test_human_tiger_waits_for_ai_goat(self):
        controller = GameController(human_side='tiger')
        assert controller.ai_side == Piece.GOAT
        assert controller.status().message == "New game started. Goats (AI) place first."
        assert controller.select_cell(0) is Feedback.NOT_YOUR_TURN

    def test_new_game_message_for_goat(self):
        controller = GameController()
        assert controller.status().message == "New game started. Place a goat."

    def test_new_game_resets(self):
        controller = GameController()
        controller.select_cell(12)
        controller.new_game()

        assert controller.game.history == []
        assert controller.status().goats_placed == 0


class TestMovement:

    def _controller(self):
        controller = GameController()
        load(controller, BaghChal.from_position(
            MOVEMENT, turn=Piece.GOAT, goats_placed=20, goats_captured=2,
        ))
        return controller

    def test_legal_destinations(self):
        controller = self._controller()
        assert controller.legal_destinations(2) == [7]
        assert controller.legal_destinations(12) == []

    def test_select_then_move(self):
        controller = self._controller()

        assert controller.select_cell(2) is Feedback.SELECTED
        assert controller.status().selected == 2

        assert controller.select_cell(17) is Feedback.INVALID
        assert controller.game.history == []

        assert controller.select_cell(7) is Feedback.MOVED
        assert controller.game.piece_at(7) == Piece.GOAT
        assert controller.game.piece_at(2) == Piece.EMPTY
        assert controller.status().selected is None

    def test_empty_cell_without_selection_is_invalid(self):
        controller = self._controller()
        assert controller.select_cell(7) is Feedback.INVALID

    def test_human_tiger_capture_wins(self):
        controller = GameController(human_side='tiger')
        load(controller, BaghChal.from_position(
            CAPTURE_TO_WIN, turn=Piece.TIGER, goats_placed=20, goats_captured=4,
        ))

        assert controller.select_cell(0) is Feedback.SELECTED
        assert controller.select_cell(2) is Feedback.CAPTURED

        status = controller.status()
        assert status.over
        assert status.winner == Piece.TIGER
        assert status.message == "Tiger Wins!"


class TestGameOver:

    def test_selection_after_game_over(self):
        controller = GameController(human_side='tiger')
        load(controller, BaghChal.from_position(TRAPPED, turn=Piece.TIGER))

        assert controller.select_cell(0) is Feedback.GAME_OVER
        assert controller.ai_move() is None

        status = controller.status()
        assert status.over
        assert status.winner == Piece.GOAT


class TestAIMove:

    def test_ai_plays_tiger(self):
        controller = GameController(ai_time_limit_ms=50)
        controller.select_cell(12)

        move = controller.ai_move()

        assert move is not None
        assert move.kind in (MoveType.MOVE, MoveType.CAPTURE)
        assert controller.game.turn == Piece.GOAT
        assert len(controller.game.history) == 2

    def test_ai_failure_is_logged_and_rolled_back(self, monkeypatch, caplog):
        controller = GameController()
        controller.select_cell(12)
        before = controller.game.board.tolist()

        def broken(*args, **kwargs):
            raise RuntimeError("search exploded")

        monkeypatch.setattr(controller.engine, 'best_move', broken)

        with caplog.at_level(logging.ERROR, logger='bagh_chal.controller'):
            assert controller.ai_move() is None

        assert "AI move failed" in caplog.text
        assert controller.game.board.tolist() == before
        assert len(controller.game.history) == 1
        assert controller.game.turn == Piece.TIGER
        assert controller.status().message == "AI error."


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
