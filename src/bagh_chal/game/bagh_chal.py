import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Sequence, Union

import numpy as np

from bagh_chal.engine.zobrist import ZobristHasher, get_zobrist_hasher
from bagh_chal.game.adjacency import BOARD_SIZE, BOARD_WIDTH, JUMPS, NEIGHBORS
from bagh_chal.game.types import Move, MoveType, Phase, Piece

logger = logging.getLogger(__name__)


TOTAL_GOATS = 20
GOATS_TO_WIN = 5
NUM_TIGERS = 4
TIGER_START_CELLS = (0, 4, 20, 24)


class IllegalMoveError(ValueError):
    """Raised when a move outside the current legal-move enumeration is played."""


class IllegalPositionError(ValueError):
    """Raised when a board layout violates the Bagh Chal invariants."""


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Everything needed to restore the state exactly as it was before a move."""
    board: np.ndarray
    turn: Piece
    goats_placed: int
    goats_captured: int
    fingerprint: int


class GameResult(NamedTuple):
    over: bool
    winner: Optional[Piece]


class BaghChal:
    """
    Bagh Chal (Tigers and Goats) game state.

    Board: 25 intersections (5x5), row-major, values from Piece
    Tigers: 4, starting on the corners
    Goats: 20, placed one per Goat turn, then moved along the lines
    Tiger wins: 5 goats captured
    Goat wins: Tiger to move with no legal move

    The state is mutated in place by apply() and restored by undo(). Each
    apply() pushes a full Snapshot so undo() is exact.
    """

    def __init__(self, hasher: Optional[ZobristHasher] = None):
        self.hasher = hasher if hasher is not None else get_zobrist_hasher()
        self.reset()

    def __repr__(self):
        return (
            f"BaghChal(turn={self.turn.name}, placed={self.goats_placed}, "
            f"captured={self.goats_captured}, moves={len(self.history)})"
        )

    def reset(self):
        """Start a new game: tigers on the corners, goat to move."""
        self._board = np.zeros(BOARD_SIZE, dtype=np.int8)
        self._board[list(TIGER_START_CELLS)] = Piece.TIGER
        self.turn = Piece.GOAT
        self.goats_placed = 0
        self.goats_captured = 0
        self.history: List[Snapshot] = []
        self.fingerprint = self.compute_fingerprint()

    @classmethod
    def from_position(
        cls,
        cells: Union[str, Sequence[int]],
        turn: Piece = Piece.GOAT,
        goats_placed: Optional[int] = None,
        goats_captured: int = 0,
        hasher: Optional[ZobristHasher] = None,
    ) -> 'BaghChal':
        """
        Build a state from a board layout.

        Args:
            cells: 25 cell values, or a string of '.', 'T', 'G' (whitespace
                and '/' are ignored so rows can be written separately)
            turn: Side to move
            goats_placed: Goats placed so far; defaults to goats on board + captured
            goats_captured: Goats captured so far
            hasher: Zobrist hasher (defaults to the process-wide one)

        Raises:
            IllegalPositionError: if the layout breaks a game invariant
        """
        if isinstance(cells, str):
            symbols = [ch for ch in cells if ch not in ' \n\t/']
            lookup = {piece.symbol: piece for piece in Piece}
            try:
                values = [lookup[ch.upper()] for ch in symbols]
            except KeyError as exc:
                raise IllegalPositionError(f"Unknown cell symbol {exc.args[0]!r}") from None
        else:
            values = [Piece(int(v)) for v in cells]

        if len(values) != BOARD_SIZE:
            raise IllegalPositionError(f"Expected {BOARD_SIZE} cells, got {len(values)}")

        board = np.array(values, dtype=np.int8)
        tigers = int(np.count_nonzero(board == Piece.TIGER))
        goats = int(np.count_nonzero(board == Piece.GOAT))
        if goats_placed is None:
            goats_placed = goats + goats_captured

        if tigers != NUM_TIGERS:
            raise IllegalPositionError(f"Expected {NUM_TIGERS} tigers, got {tigers}")
        if not 0 <= goats_placed <= TOTAL_GOATS:
            raise IllegalPositionError(f"goats_placed out of range: {goats_placed}")
        if not 0 <= goats_captured <= GOATS_TO_WIN:
            raise IllegalPositionError(f"goats_captured out of range: {goats_captured}")
        if goats != goats_placed - goats_captured:
            raise IllegalPositionError(
                f"{goats} goats on board but {goats_placed} placed and {goats_captured} captured"
            )
        if turn not in (Piece.TIGER, Piece.GOAT):
            raise IllegalPositionError("turn must be TIGER or GOAT")

        game = cls(hasher)
        game._board = board
        game.turn = Piece(turn)
        game.goats_placed = goats_placed
        game.goats_captured = goats_captured
        game.fingerprint = game.compute_fingerprint()
        return game

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return Phase.PLACEMENT if self.goats_placed < TOTAL_GOATS else Phase.MOVEMENT

    @property
    def board(self) -> np.ndarray:
        """Read-only view of the 25 cells; moves go through apply() or play()."""
        view = self._board.view()
        view.setflags(write=False)
        return view

    @property
    def goats_in_hand(self) -> int:
        return TOTAL_GOATS - self.goats_placed

    def piece_at(self, cell: int) -> Piece:
        return Piece(int(self._board[cell]))

    def count(self, piece: Piece) -> int:
        return int(np.count_nonzero(self._board == piece))

    def cells_of(self, piece: Piece) -> List[int]:
        return np.flatnonzero(self._board == piece).tolist()

    def compute_fingerprint(self) -> int:
        """Fingerprint recomputed from scratch (apply() updates it incrementally)."""
        return self.hasher.hash_position(self._board.tolist(), self.turn, self.goats_placed)

    def to_string(self) -> str:
        rows = []
        for row in range(BOARD_WIDTH):
            cells = self._board[row * BOARD_WIDTH:(row + 1) * BOARD_WIDTH]
            rows.append(' '.join(Piece(int(v)).symbol for v in cells))
        return '\n'.join(rows)

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def legal_moves(self, side: Piece) -> List[Move]:
        """
        Enumerate legal moves for `side` without mutating the state.

        Order is deterministic: ascending cell index, then the fixed
        neighbor order of the adjacency model.

        Args:
            side: Piece.TIGER or Piece.GOAT

        Returns:
            List of Move
        """
        board = self._board.tolist()
        moves = []

        if side == Piece.GOAT:
            if self.goats_placed < TOTAL_GOATS:
                for cell in range(BOARD_SIZE):
                    if board[cell] == Piece.EMPTY:
                        moves.append(Move.place(cell))
            else:
                for cell in range(BOARD_SIZE):
                    if board[cell] == Piece.GOAT:
                        for n in NEIGHBORS[cell]:
                            if board[n] == Piece.EMPTY:
                                moves.append(Move.step(cell, n))
        elif side == Piece.TIGER:
            for cell in range(BOARD_SIZE):
                if board[cell] != Piece.TIGER:
                    continue
                for n, landing in JUMPS[cell]:
                    if board[n] == Piece.EMPTY:
                        moves.append(Move.step(cell, n))
                    elif board[n] == Piece.GOAT and landing is not None and board[landing] == Piece.EMPTY:
                        moves.append(Move.capture(cell, landing, n))
        else:
            raise ValueError(f"Side must be TIGER or GOAT, got {side!r}")

        return moves

    # ------------------------------------------------------------------
    # Make / undo
    # ------------------------------------------------------------------

    def apply(self, move: Move):
        """
        Apply a move previously produced by legal_moves() for the side to move.

        This is the unchecked fast path used by the search; external callers
        should use play().
        """
        self.history.append(Snapshot(
            board=self._board.copy(),
            turn=self.turn,
            goats_placed=self.goats_placed,
            goats_captured=self.goats_captured,
            fingerprint=self.fingerprint,
        ))

        hasher = self.hasher
        h = self.fingerprint
        board = self._board

        if move.kind is MoveType.PLACE:
            board[move.to] = Piece.GOAT
            h = hasher.toggle_cell(h, move.to, Piece.EMPTY, Piece.GOAT)
            h = hasher.toggle_placed(h, self.goats_placed, self.goats_placed + 1)
            self.goats_placed += 1
        elif move.kind is MoveType.MOVE:
            board[move.origin] = Piece.EMPTY
            board[move.to] = self.turn
            h = hasher.toggle_cell(h, move.origin, self.turn, Piece.EMPTY)
            h = hasher.toggle_cell(h, move.to, Piece.EMPTY, self.turn)
        else:
            board[move.origin] = Piece.EMPTY
            board[move.to] = Piece.TIGER
            board[move.jumped] = Piece.EMPTY
            h = hasher.toggle_cell(h, move.origin, Piece.TIGER, Piece.EMPTY)
            h = hasher.toggle_cell(h, move.to, Piece.EMPTY, Piece.TIGER)
            h = hasher.toggle_cell(h, move.jumped, Piece.GOAT, Piece.EMPTY)
            self.goats_captured += 1

        self.turn = self.turn.opponent
        self.fingerprint = hasher.toggle_turn(h)

    def undo(self):
        """
        Restore the state saved by the most recent apply().

        Raises:
            IndexError: if there is no move to undo
        """
        if not self.history:
            raise IndexError("No move to undo")
        snapshot = self.history.pop()
        self._board = snapshot.board
        self.turn = snapshot.turn
        self.goats_placed = snapshot.goats_placed
        self.goats_captured = snapshot.goats_captured
        self.fingerprint = snapshot.fingerprint

    @contextmanager
    def applied(self, move: Move) -> Iterator['BaghChal']:
        """
        Apply `move` for the duration of a with-block.

        The move is undone on every exit path, including exceptions.
        """
        self.apply(move)
        try:
            yield self
        finally:
            self.undo()

    def play(self, move: Move):
        """
        Checked entry point for moves coming from outside the engine.

        Raises:
            IllegalMoveError: if the game is over or `move` is not in the
                current legal-move enumeration
        """
        if self.is_over():
            raise IllegalMoveError(f"Game is over, cannot play {move}")
        if move not in self.legal_moves(self.turn):
            raise IllegalMoveError(f"{move} is not legal for {self.turn.name}")
        self.apply(move)
        logger.debug("%s played %s", self.history[-1].turn.name, move)

    # ------------------------------------------------------------------
    # Terminal detection
    # ------------------------------------------------------------------

    def get_result(self) -> GameResult:
        """
        Returns (over, winner).

        The capture count is checked first, so five captures is a Tiger win
        whoever is to move. Goat wins only when Tiger is to move and has no
        legal move.
        """
        if self.goats_captured >= GOATS_TO_WIN:
            return GameResult(True, Piece.TIGER)

        if self.turn == Piece.TIGER and not self.legal_moves(Piece.TIGER):
            return GameResult(True, Piece.GOAT)

        return GameResult(False, None)

    def is_over(self) -> bool:
        return self.get_result().over

    @property
    def winner(self) -> Optional[Piece]:
        return self.get_result().winner
