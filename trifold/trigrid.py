from __future__ import annotations
import math
from typing import NamedTuple, Tuple
import numpy as np

SQRT3 = float(np.sqrt(3.0))


class Coord(NamedTuple):
    """Integer address (x, y) of one cell in the triangular tiling."""
    x: int
    y: int

    def __add__(self, other: Tuple[int, int]) -> "Coord":
        return Coord(self[0] + other[0], self[1] + other[1])

    def __sub__(self, other: Tuple[int, int]) -> "Coord":
        return Coord(self[0] - other[0], self[1] - other[1])

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


def parity(c: Tuple[int, int]) -> int:
    """+1 for an upward triangle, -1 for a downward one."""
    return ((c[0] ^ c[1]) & 1) * 2 - 1


def round_half_away(v: float) -> int:
    """Round to nearest integer, ties away from zero (not banker's rounding)."""
    return int(math.copysign(math.floor(abs(v) + 0.5), v))


def texture_coords(c: Tuple[int, int], scale: float) -> Tuple[float, float]:
    """
    Lattice -> planar position of the cell's reference point.

    Basis vectors are (1, 0) and (0, sqrt(3)), both scaled by scale/2.
    """
    return (c[0] * scale / 2.0, (c[1] * SQRT3 / 2.0) * scale)


def world_coords(c: Tuple[int, int], scale: float) -> Tuple[float, float]:
    """Planar position of a piece sitting on the centroid of its triangle."""
    px, py = texture_coords(c, scale)
    py -= parity(c) * scale * SQRT3 / 12.0
    return (px, py)


def from_world_coords(xy: Tuple[float, float], scale: float) -> Coord:
    """
    Planar position -> nearest lattice cell.

    Approximate: cell boundaries follow apex-down +1 triangles, so inside a
    drawn apex-up triangle only the area around its centre maps back to it.
    """
    px, py = float(xy[0]), float(xy[1])
    yf = py * 2.0 / (scale * SQRT3)
    y = round_half_away(yf)
    xf = px * 2.0 / scale
    x_floor = math.floor(xf)
    bias = ((x_floor ^ y) & 1) * 2 - 1
    x = round_half_away(xf + (y - yf) * bias)
    return Coord(x, y)


def triangle_corners(c: Tuple[int, int], scale: float) -> np.ndarray:
    """
    Outline of a cell as a (3, 2) array.

    The reference point from texture_coords is the middle of the triangle's
    vertical extent; parity +1 points the apex up, parity -1 down.
    """
    cx, cy = texture_coords(c, scale)
    half_h = scale * SQRT3 / 4.0
    p = parity(c)
    return np.array(
        [
            [cx - scale / 2.0, cy - p * half_h],
            [cx + scale / 2.0, cy - p * half_h],
            [cx, cy + p * half_h],
        ],
        dtype=float,
    )
