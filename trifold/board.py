from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import BoardInvariantError
from .trigrid import SQRT3, Coord, parity

_LOGGER = logging.getLogger(__name__)

Bounds = Tuple[Tuple[int, int], Tuple[int, int]]  # ((min_x, max_x), (min_y, max_y))

# Rows of the starting layout, as a half-open range [ROW_MIN, ROW_END).
ROW_MIN = -3
ROW_END = 3
BLUE_ROWS = (-3, -2)
RED_ROWS = (1, 2)

# Longest run of missing columns or rows pretty() spells out in full.
GAP_LIMIT = 8


class PieceColor(Enum):
    BLUE = "blue"
    RED = "red"


@dataclass(frozen=True)
class Piece:
    """A game token; promoted pieces are drawn and parsed as "<color>-special"."""
    color: PieceColor
    promoted: bool = False

    @classmethod
    def blue(cls, promoted: bool = False) -> "Piece":
        return cls(PieceColor.BLUE, promoted)

    @classmethod
    def red(cls, promoted: bool = False) -> "Piece":
        return cls(PieceColor.RED, promoted)

    @property
    def symbol(self) -> str:
        s = "b" if self.color is PieceColor.BLUE else "r"
        return s.upper() if self.promoted else s


@dataclass
class Tile:
    """One cell of the board, optionally occupied by a piece."""
    piece: Optional[Piece] = None


def row_bound(y: int) -> int:
    """Largest |x| present in row y of the starting layout."""
    return 5 - min(abs(y), abs(y + 1))


def initial_piece(c: Coord) -> Optional[Piece]:
    """Starting occupant of a cell: the x == 0 piece of each colour is promoted."""
    p = parity(c)
    if p == 1 and c.y in BLUE_ROWS:
        return Piece.blue(c.x == 0)
    if p == -1 and c.y in RED_ROWS:
        return Piece.red(c.x == 0)
    return None


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class GameBoard:
    """
    Triangular-tiling board keyed by Coord.

    - Cells are never created or destroyed after construction; shear only
      relabels them and move/set only touch the piece field.
    - Parity is derived from the key, never stored on the Tile.
    """

    def __init__(self, tiles: Optional[Mapping[Tuple[int, int], Tile]] = None):
        self.tiles: Dict[Coord, Tile] = {}
        if tiles is None:
            self._build_initial_grid()
        else:
            self.tiles = {Coord(*qr): t for qr, t in tiles.items()}

    # --- grid construction ---
    def _build_initial_grid(self) -> None:
        tiles: Dict[Coord, Tile] = {}
        for y in range(ROW_MIN, ROW_END):
            b = row_bound(y)
            for x in range(-b, b + 1):
                c = Coord(x, y)
                tiles[c] = Tile(piece=initial_piece(c))
        self.tiles = tiles
        _LOGGER.debug("Built board with %d cells", len(tiles))

    # --- queries ---
    def __len__(self) -> int:
        return len(self.tiles)

    def __contains__(self, c: object) -> bool:
        return c in self.tiles

    def get_tile(self, c: Tuple[int, int]) -> Optional[Tile]:
        return self.tiles.get(Coord(*c))

    def iter_tiles(self) -> Iterator[Tuple[Coord, Tile]]:
        """(Coord, Tile) pairs; a fresh iterator on every call."""
        for c, t in self.tiles.items():
            yield c, t

    def piece_counts(self) -> Dict[PieceColor, int]:
        counts = {color: 0 for color in PieceColor}
        for t in self.tiles.values():
            if t.piece is not None:
                counts[t.piece.color] += 1
        return counts

    def bounding_box(self) -> Bounds:
        if not self.tiles:
            raise BoardInvariantError("bounding box of an empty board")
        xs = [c.x for c in self.tiles]
        ys = [c.y for c in self.tiles]
        return (min(xs), max(xs)), (min(ys), max(ys))

    def display_scale(self, view_extent: float = 600.0) -> float:
        """Pixels per lattice unit so the whole board fits in view_extent."""
        (min_x, max_x), (min_y, max_y) = self.bounding_box()
        span = max((max_x - min_x) / 2.0, (max_y - min_y) * 2.0 / SQRT3)
        if span <= 0:
            return float(view_extent)
        return float(view_extent) / span

    # --- mutation ---
    def set_piece(self, c: Tuple[int, int], piece: Optional[Piece]) -> bool:
        """Overwrite a cell's occupant; returns False (and does nothing) if c is absent."""
        t = self.tiles.get(Coord(*c))
        if t is None:
            return False
        t.piece = piece
        return True

    def rekey(self, moves: Mapping[Coord, Coord]) -> None:
        """
        Relabel cells: every key in `moves` is replaced by its value, all
        other cells keep their key. Raises if two cells end up on one Coord.
        """
        new_tiles: Dict[Coord, Tile] = {}
        for c, t in self.tiles.items():
            dest = moves.get(c, c)
            if dest in new_tiles:
                raise BoardInvariantError(f"duplicate cell key {dest}")
            new_tiles[dest] = t
        self.tiles = new_tiles

    def recenter(self) -> Coord:
        """
        Shift all keys so the board sits around the origin.

        The center is forced even (divide by 4, multiply by 2) so every cell
        keeps its parity. Returns the subtracted center.
        """
        (min_x, max_x), (min_y, max_y) = self.bounding_box()
        center = Coord(_trunc_div(min_x + max_x, 4) * 2, _trunc_div(min_y + max_y, 4) * 2)
        if center != (0, 0):
            self.rekey({c: c - center for c in self.tiles})
            _LOGGER.debug("Recentered board by %s", center)
        return center

    # --- text dump ---
    def pretty(self) -> str:
        """
        Row-per-line dump, top row first. Upward cells show as '^', downward
        as 'v', occupied cells as the piece symbol; gaps are blank.

        Runs of more than GAP_LIMIT missing columns (or rows) collapse into a
        single '…', so the cost follows the number of cells, not the extent.
        """
        if not self.tiles:
            return ""
        rows: Dict[int, List[int]] = {}
        for c in self.tiles:
            rows.setdefault(c.y, []).append(c.x)
        min_x = min(c.x for c in self.tiles)

        lines: List[str] = []
        prev_y: Optional[int] = None
        for y in sorted(rows, reverse=True):
            if prev_y is not None:
                missing = prev_y - y - 1
                lines.extend(["…"] if missing > GAP_LIMIT else [""] * missing)
            prev_y = y

            row: List[str] = []
            next_x = min_x
            for x in sorted(rows[y]):
                gap = x - next_x
                row.append("…" if gap > GAP_LIMIT else " " * gap)
                t = self.tiles[Coord(x, y)]
                if t.piece is not None:
                    row.append(t.piece.symbol)
                else:
                    row.append("^" if parity((x, y)) == 1 else "v")
                next_x = x + 1
            lines.append("".join(row))
        return "\n".join(lines)
