from __future__ import annotations
from typing import Optional, Tuple

from .errors import FrameMissingError
from .trigrid import Coord, from_world_coords


class HitTester:
    """
    Pointer position -> board coordinate, for the diagnostic echo.

    Positions are expected in the world frame the board is drawn in (the
    caller applies any camera transform). Read-only with respect to the board.
    """

    def __init__(self):
        self.last: Optional[Coord] = None

    def pick(self, world_xy: Optional[Tuple[float, float]], scale: Optional[float]) -> Coord:
        if world_xy is None:
            raise FrameMissingError("no pointer position to hit-test")
        if scale is None or scale <= 0:
            raise FrameMissingError(f"no usable display scale ({scale!r})")
        c = from_world_coords(world_xy, scale)
        self.last = c
        return c

    def hover(self, world_xy: Optional[Tuple[float, float]], scale: Optional[float]) -> str:
        """Echo text for the cell under the pointer."""
        return str(self.pick(world_xy, scale))
