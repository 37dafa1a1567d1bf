"""
Text command grammar.

    move  <x,y> <x,y>    swap the pieces of two cells
    shear <x,y> <x,y>    fold the board so the first cell lands on the second
    set   <x,y> <piece>  piece: empty | blue | blue-special | red | red-special

Anything else is dropped without an error.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

from .board import Piece, PieceColor
from .trigrid import Coord

_LOGGER = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")

PIECE_KEYWORDS: Dict[str, Optional[Piece]] = {
    "empty": None,
    "blue": Piece.blue(False),
    "blue-special": Piece.blue(True),
    "red": Piece.red(False),
    "red-special": Piece.red(True),
}


@dataclass(frozen=True)
class MoveAction:
    origin: Coord
    end: Coord


@dataclass(frozen=True)
class ShearAction:
    origin: Coord
    end: Coord


@dataclass(frozen=True)
class SetAction:
    coord: Coord
    piece: Optional[Piece]


Action = Union[MoveAction, ShearAction, SetAction]


def parse_coord(text: str) -> Optional[Coord]:
    """'x,y' with signed base-10 integers -> Coord, else None."""
    parts = text.split(",")
    if len(parts) != 2:
        return None
    if not all(_INT_RE.fullmatch(p) for p in parts):
        return None
    return Coord(int(parts[0]), int(parts[1]))


def parse_command(line: str) -> Optional[Action]:
    tokens = line.split()
    if len(tokens) != 3:
        _LOGGER.debug("Dropped command %r: expected 3 tokens", line)
        return None
    verb, first, second = tokens

    coord = parse_coord(first)
    if coord is None:
        _LOGGER.debug("Dropped command %r: bad coordinate %r", line, first)
        return None

    if verb == "set":
        if second not in PIECE_KEYWORDS:
            _LOGGER.debug("Dropped command %r: unknown piece %r", line, second)
            return None
        return SetAction(coord, PIECE_KEYWORDS[second])

    if verb in ("move", "shear"):
        end = parse_coord(second)
        if end is None:
            _LOGGER.debug("Dropped command %r: bad coordinate %r", line, second)
            return None
        return MoveAction(coord, end) if verb == "move" else ShearAction(coord, end)

    _LOGGER.debug("Dropped command %r: unknown verb", line)
    return None


def _piece_keyword(piece: Optional[Piece]) -> str:
    if piece is None:
        return "empty"
    name = "blue" if piece.color is PieceColor.BLUE else "red"
    return name + "-special" if piece.promoted else name


def format_action(action: Action) -> str:
    """Inverse of parse_command."""
    if isinstance(action, MoveAction):
        return f"move {action.origin} {action.end}"
    if isinstance(action, ShearAction):
        return f"shear {action.origin} {action.end}"
    return f"set {action.coord} {_piece_keyword(action.piece)}"
