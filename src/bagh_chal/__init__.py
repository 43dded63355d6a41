"""
Bagh Chal (Tigers and Goats) game engine with an alpha-beta search AI.
"""

from bagh_chal.game import BaghChal, Move, MoveType, Phase, Piece
from bagh_chal.engine import AlphaBetaEngine, SearchResult

__version__ = '0.1'

__all__ = ['BaghChal', 'Move', 'MoveType', 'Phase', 'Piece', 'AlphaBetaEngine', 'SearchResult']
