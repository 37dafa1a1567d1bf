"""
Game loop coordination: input buffering, the action queue and the
"needs re-render" flag.

One tick:
  1) drain buffered characters into command lines (once),
  2) parse lines into actions and queue them,
  3) apply every queued action to the board, in order,
  4) if anything asked for a re-render: recenter and recompute the scale,
  5) hit-test the latest pointer position against that scale.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import Iterable, List, Optional, TextIO, Tuple

from .board import GameBoard
from .commands import Action, MoveAction, SetAction, ShearAction, format_action, parse_command
from .config import GameConfig
from .hittest import HitTester
from .mutations import move_piece, set_piece
from .shear import shear
from .textinput import LineBuffer, echo

_LOGGER = logging.getLogger(__name__)


def apply_action(board: GameBoard, action: Action) -> bool:
    """Apply one action; returns True if it raises the update signal."""
    if isinstance(action, ShearAction):
        return shear(board, action.origin, action.end)
    if isinstance(action, MoveAction):
        return move_piece(board, action.origin, action.end)
    if isinstance(action, SetAction):
        return set_piece(board, action.coord, action.piece)
    raise TypeError(f"not an action: {action!r}")


class ActionQueue:
    """FIFO of parsed actions waiting for the next tick."""

    def __init__(self, actions: Iterable[Action] = ()):
        self._items: deque[Action] = deque(actions)

    def __len__(self) -> int:
        return len(self._items)

    def push(self, action: Action) -> None:
        self._items.append(action)

    def drain(self) -> List[Action]:
        items = list(self._items)
        self._items.clear()
        return items


class RenderFlag:
    """Counts update signals raised since the last consume()."""

    def __init__(self, raised: bool = False):
        self.count = 1 if raised else 0

    def raise_signal(self) -> None:
        self.count += 1

    def consume(self) -> bool:
        was_set = self.count > 0
        self.count = 0
        return was_set


class GameSession:
    """
    Owns the board and everything that feeds it. The board is written only
    from tick(); renderers and the hit tester read it in between.
    """

    def __init__(
        self,
        board: Optional[GameBoard] = None,
        config: Optional[GameConfig] = None,
        stream: Optional[TextIO] = None,
    ):
        self.config = config or GameConfig()
        self.board = board if board is not None else GameBoard()
        self.queue = ActionQueue()
        # the initial layout needs a first render
        self.render_flag = RenderFlag(raised=True)
        self.hit_tester = HitTester()
        self.stream = stream
        self.line_buffer = LineBuffer(stream=stream, echo_enabled=self.config.echo)
        self.scale: Optional[float] = None
        self._pointer: Optional[Tuple[float, float]] = None
        self._pointer_dirty = False

    # --- external input ---
    def feed_chars(self, chars: str) -> None:
        self.line_buffer.push(chars)

    def feed_line(self, line: str) -> None:
        self.line_buffer.push(line + "\r")

    def feed_pointer(self, world_xy: Tuple[float, float]) -> None:
        self._pointer = (float(world_xy[0]), float(world_xy[1]))
        self._pointer_dirty = True

    def submit(self, line: str) -> Optional[Action]:
        """Parse a complete line and queue the action, if any."""
        action = parse_command(line)
        if action is not None:
            self.queue.push(action)
        return action

    # --- loop ---
    def apply_pending(self) -> int:
        """Apply queued actions in order; returns how many were applied."""
        actions = self.queue.drain()
        for action in actions:
            signalled = apply_action(self.board, action)
            if signalled:
                self.render_flag.raise_signal()
            _LOGGER.debug("Applied %s (signal=%s)", format_action(action), signalled)
        return len(actions)

    def refresh(self) -> bool:
        """Recenter and rescale if an update was signalled; True if so."""
        if not self.render_flag.consume():
            return False
        self.board.recenter()
        self.scale = self.board.display_scale(self.config.view_extent)
        _LOGGER.debug("Board refreshed, scale %.3f", self.scale)
        return True

    def hover(self) -> Optional[str]:
        """Hit-test the latest pointer position, if it moved since last tick."""
        if not self._pointer_dirty or self.scale is None:
            return None
        self._pointer_dirty = False
        text = self.hit_tester.hover(self._pointer, self.scale)
        if self.config.echo:
            echo(text, self.stream)
        return text

    def tick(self) -> bool:
        """Run one game-loop iteration; True if the board must be redrawn."""
        for line in self.line_buffer.drain():
            self.submit(line)
        self.apply_pending()
        needs_render = self.refresh()
        self.hover()
        return needs_render
