"""
Headless game controller.

Turns cell selections from a display layer into enumerated moves, runs the
AI for the other side and keeps the status a display needs. Nothing here
draws anything: a renderer reads status() and board contents, and forwards
clicks to select_cell().
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from bagh_chal.config_bagh_chal import CONTROLLER_CONFIG
from bagh_chal.engine.alphabeta import AlphaBetaEngine
from bagh_chal.game.bagh_chal import BaghChal
from bagh_chal.game.types import Move, MoveType, Phase, Piece

logger = logging.getLogger(__name__)


class Feedback(Enum):
    """Outcome of a cell selection."""
    PLACED = 'placed'
    SELECTED = 'selected'
    MOVED = 'moved'
    CAPTURED = 'captured'
    INVALID = 'invalid'
    NOT_YOUR_TURN = 'not_your_turn'
    GAME_OVER = 'game_over'


@dataclass(frozen=True)
class ControllerStatus:
    turn: Piece
    phase: Phase
    goats_placed: int
    goats_captured: int
    over: bool
    winner: Optional[Piece]
    selected: Optional[int]
    message: str


def _parse_side(side: Union[str, Piece]) -> Piece:
    if isinstance(side, Piece):
        return side
    return Piece[side.upper()]


class GameController:
    """
    One human side against the engine.

    Args:
        human_side: Side the human plays ('goat'/'tiger' or a Piece)
        ai_time_limit_ms: Search budget per AI move
    """

    def __init__(
        self,
        human_side: Union[str, Piece] = CONTROLLER_CONFIG['human_side'],
        ai_time_limit_ms: int = CONTROLLER_CONFIG['ai_time_limit_ms'],
    ):
        self.human_side = _parse_side(human_side)
        self.ai_time_limit_ms = ai_time_limit_ms
        self.new_game()

    def new_game(self):
        """Discard the current game and start a fresh one."""
        self.game = BaghChal()
        self.engine = AlphaBetaEngine(self.game)
        self.selected: Optional[int] = None
        if self.human_side == Piece.GOAT:
            self.message = "New game started. Place a goat."
        else:
            self.message = "New game started. Goats (AI) place first."
        logger.info("New game, human plays %s", self.human_side.name)

    @property
    def ai_side(self) -> Piece:
        return self.human_side.opponent

    def legal_destinations(self, cell: int) -> List[int]:
        """Destination cells of the side to move's legal moves starting at `cell`."""
        return [m.to for m in self.game.legal_moves(self.game.turn) if m.origin == cell]

    def select_cell(self, cell: int) -> Feedback:
        """
        Handle a click on `cell` by the human player.

        Invalid selections leave the game untouched and return
        Feedback.INVALID so the display can signal it.
        """
        game = self.game
        if game.is_over():
            return Feedback.GAME_OVER
        if game.turn != self.human_side:
            self.message = f"It's {game.turn.name.title()}'s (AI) turn! Please wait."
            return Feedback.NOT_YOUR_TURN

        legal = game.legal_moves(game.turn)

        if game.turn == Piece.GOAT and game.phase is Phase.PLACEMENT:
            move = next((m for m in legal if m.kind is MoveType.PLACE and m.to == cell), None)
            if move is None:
                self.message = "Invalid placement. Choose an empty spot."
                return Feedback.INVALID
            self._play(move)
            return Feedback.PLACED

        if game.piece_at(cell) == game.turn:
            self.selected = cell
            self.message = f"{game.turn.name.title()} selected. Choose destination."
            return Feedback.SELECTED

        if self.selected is not None:
            move = next((m for m in legal if m.origin == self.selected and m.to == cell), None)
            if move is not None:
                self._play(move)
                self.selected = None
                return Feedback.CAPTURED if move.is_capture else Feedback.MOVED

        self.message = "Invalid move."
        return Feedback.INVALID

    def ai_move(self) -> Optional[Move]:
        """
        Let the engine play for the side to move.

        Engine failures are logged; the live game is rolled back to its state
        before the search and None is returned.
        """
        game = self.game
        if game.is_over():
            return None

        history_length = len(game.history)
        self.message = f"AI is thinking for {game.turn.name.title()}..."

        try:
            move = self.engine.best_move(self.ai_time_limit_ms)
            if move is None:
                logger.warning("AI found no move for %s", game.turn.name)
                return None
            self._play(move)
        except Exception:
            logger.exception("AI move failed")
            while len(game.history) > history_length:
                game.undo()
            self.message = "AI error."
            return None

        return move

    def _play(self, move: Move):
        self.game.play(move)
        result = self.game.get_result()
        if result.over:
            self.message = "Tiger Wins!" if result.winner == Piece.TIGER else "Goats Win!"
            logger.info("Game over: %s wins", result.winner.name)
        elif self.game.turn == Piece.GOAT:
            if self.game.phase is Phase.PLACEMENT:
                self.message = "Place a goat on an empty spot."
            else:
                self.message = "Move a goat to an adjacent spot."
        else:
            self.message = "Tiger to move."

    def status(self) -> ControllerStatus:
        result = self.game.get_result()
        return ControllerStatus(
            turn=self.game.turn,
            phase=self.game.phase,
            goats_placed=self.game.goats_placed,
            goats_captured=self.game.goats_captured,
            over=result.over,
            winner=result.winner,
            selected=self.selected,
            message=self.message,
        )
