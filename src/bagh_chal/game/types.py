"""
Piece, phase and move types shared by the game state and the search engine.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class Piece(IntEnum):
    """Contents of a board cell. Values double as board array entries."""
    EMPTY = 0
    TIGER = 1
    GOAT = 2

    @property
    def opponent(self) -> 'Piece':
        if self == Piece.TIGER:
            return Piece.GOAT
        if self == Piece.GOAT:
            return Piece.TIGER
        raise ValueError("EMPTY has no opponent")

    @property
    def symbol(self) -> str:
        return '.TG'[self]


class Phase(Enum):
    """Game phase, always derived from the number of goats placed."""
    PLACEMENT = 0
    MOVEMENT = 1


class MoveType(Enum):
    PLACE = 'place'
    MOVE = 'move'
    CAPTURE = 'capture'


@dataclass(frozen=True)
class Move:
    """
    A single Bagh Chal move.

    Attributes:
        kind: PLACE, MOVE or CAPTURE
        to: Destination cell (0-24)
        origin: Source cell, None for placements
        jumped: Cell of the captured goat, only set for captures
    """
    kind: MoveType
    to: int
    origin: Optional[int] = None
    jumped: Optional[int] = None

    @classmethod
    def place(cls, to: int) -> 'Move':
        return cls(MoveType.PLACE, to)

    @classmethod
    def step(cls, origin: int, to: int) -> 'Move':
        return cls(MoveType.MOVE, to, origin)

    @classmethod
    def capture(cls, origin: int, to: int, jumped: int) -> 'Move':
        return cls(MoveType.CAPTURE, to, origin, jumped)

    @property
    def is_capture(self) -> bool:
        return self.kind is MoveType.CAPTURE

    def __str__(self) -> str:
        if self.kind is MoveType.PLACE:
            return f"P{self.to}"
        if self.kind is MoveType.MOVE:
            return f"{self.origin}-{self.to}"
        return f"{self.origin}x{self.to}({self.jumped})"
