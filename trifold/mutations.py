from __future__ import annotations
import logging
from typing import Optional, Tuple

from .board import GameBoard, Piece
from .trigrid import Coord

_LOGGER = logging.getLogger(__name__)


def move_piece(board: GameBoard, origin: Tuple[int, int], end: Tuple[int, int]) -> bool:
    """
    Swap the occupants of two cells (either may be empty).

    Does nothing if either cell is missing, but still asks for a re-render:
    the return value is always True.
    """
    a = board.get_tile(origin)
    b = board.get_tile(end)
    if a is None or b is None:
        _LOGGER.debug("Move %s -> %s: cell not on board", Coord(*origin), Coord(*end))
    else:
        a.piece, b.piece = b.piece, a.piece
    return True


def set_piece(board: GameBoard, c: Tuple[int, int], piece: Optional[Piece]) -> bool:
    """Overwrite one cell's occupant; False (no re-render) if the cell is missing."""
    if not board.set_piece(c, piece):
        _LOGGER.debug("Set %s: cell not on board", Coord(*c))
        return False
    return True
