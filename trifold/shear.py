"""
Board fold ("shear"): translate one half of the board along a lattice axis.

Through `origin` there are three symmetry axes of the triangular lattice.
The axis is picked from the direction origin -> end, the closed half-plane
on origin's side is selected, and every selected cell moves rigidly so
that origin lands on end.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .board import GameBoard
from .trigrid import Coord, parity

_LOGGER = logging.getLogger(__name__)


class ShearAxis(Enum):
    HORIZONTAL = "horizontal"
    DIAGONAL_A = "diagonal-a"  # along (1, 1)
    DIAGONAL_B = "diagonal-b"  # along (-1, 1)


def classify_shear(origin: Coord, end: Coord) -> Optional[ShearAxis]:
    """Axis of the shear origin -> end, or None if it is not a legal shear."""
    if parity(origin) != parity(end):
        return None
    if origin.y == end.y:
        return ShearAxis.HORIZONTAL
    if end.x - origin.x == end.y - origin.y:
        return ShearAxis.DIAGONAL_A
    if origin.x - end.x == end.y - origin.y:
        return ShearAxis.DIAGONAL_B
    return None


def _selector(axis: ShearAxis, origin: Coord) -> Callable[[Coord], bool]:
    p = parity(origin)
    if axis is ShearAxis.HORIZONTAL:
        return lambda c: c.y * p >= origin.y * p
    if axis is ShearAxis.DIAGONAL_A:
        return lambda c: (c.x - origin.x) * p >= (c.y - origin.y) * p
    return lambda c: (origin.x - c.x) * p >= (c.y - origin.y) * p


def shear_delta(axis: ShearAxis, origin: Coord, end: Coord) -> Coord:
    if axis is ShearAxis.HORIZONTAL:
        return Coord(end.x - origin.x, 0)
    return end - origin


def sheared_cells(board: GameBoard, axis: ShearAxis, origin: Coord) -> List[Coord]:
    """Cells of the half-plane that a shear along `axis` through origin moves."""
    selected = _selector(axis, origin)
    return [c for c in board.tiles if selected(c)]


def shear(board: GameBoard, origin: Tuple[int, int], end: Tuple[int, int]) -> bool:
    """
    Apply the shear origin -> end in place.

    Returns True when the board must be re-rendered (one signal no matter
    how many cells moved), False when the shear was rejected and nothing
    changed.
    """
    origin, end = Coord(*origin), Coord(*end)
    axis = classify_shear(origin, end)
    if axis is None:
        _LOGGER.debug("Rejected shear %s -> %s", origin, end)
        return False

    delta = shear_delta(axis, origin, end)
    moves: Dict[Coord, Coord] = {c: c + delta for c in sheared_cells(board, axis, origin)}
    board.rekey(moves)
    _LOGGER.debug("Shear %s %s -> %s moved %d cells by %s", axis.value, origin, end, len(moves), delta)
    return True
