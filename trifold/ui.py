from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from .board import PieceColor, Piece
from .session import GameSession
from .trigrid import Coord, parity, triangle_corners, world_coords

# --- UI styling ---
STYLE = {
    "background": "black",
    "cell_up": (0.5, 0.5, 0.5, 1.0),         # gray
    "cell_down": (1.0, 1.0, 1.0, 1.0),       # white
    "cell_origin": (0.5, 1.0, 0.83, 1.0),    # aquamarine
    "cell_edge": (0.0, 0.0, 0.0, 0.6),
    "promoted_edge": (1.0, 0.84, 0.0, 1.0),  # gold
    "plain_edge": (0.0, 0.0, 0.0, 1.0),
}

PIECE_COLORS = {
    PieceColor.BLUE: (0.0, 0.0, 1.0, 1.0),
    PieceColor.RED: (1.0, 0.0, 0.0, 1.0),
}

# piece diameter relative to the display scale
PIECE_SIZE = 0.35

# matplotlib key names that map onto characters of the command line
SPECIAL_KEYS = {
    "enter": "\r",
    "backspace": "\x7f",
    "space": " ",
}


def key_to_chars(key: Optional[str]) -> str:
    """Translate a matplotlib key name into the characters it types."""
    if key is None:
        return ""
    if key in SPECIAL_KEYS:
        return SPECIAL_KEYS[key]
    if len(key) == 1:
        return key
    return ""


def cell_color(c: Coord) -> Tuple[float, float, float, float]:
    if c == (0, 0):
        return STYLE["cell_origin"]
    return STYLE["cell_up"] if parity(c) == 1 else STYLE["cell_down"]


def piece_style(piece: Piece) -> Tuple[tuple, tuple]:
    """(face, edge) colours of a piece marker."""
    edge = STYLE["promoted_edge"] if piece.promoted else STYLE["plain_edge"]
    return PIECE_COLORS[piece.color], edge


def _style_axes(ax):
    """Dark, clean axes with no ticks."""
    ax.set_xticks([])
    ax.set_yticks([])
    ax.tick_params(left=False, bottom=False, labelleft=False, labelbottom=False)
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_facecolor(STYLE["background"])


def _disable_default_keymaps():
    """Typed commands must not trigger matplotlib's save/zoom/quit shortcuts."""
    for name in list(plt.rcParams.keys()):
        if name.startswith("keymap."):
            plt.rcParams[name] = []


class BoardView:
    """
    Matplotlib viewer for a GameSession.

    - Typing: characters are fed to the session's line buffer; Enter submits.
    - Pointer motion: the hovered cell is echoed to the terminal.
    - A canvas timer runs session.tick(); the scene is rebuilt from the board
      whenever the tick reports an update.
    """

    def __init__(self, session: GameSession):
        self.session = session
        extent = session.config.view_extent

        _disable_default_keymaps()
        self.fig = plt.figure(figsize=(8, 8))
        self.fig.patch.set_facecolor(STYLE["background"])
        self.ax = self.fig.add_subplot(1, 1, 1)
        _style_axes(self.ax)
        self.ax.set_aspect("equal")
        self.ax.set_xlim(-extent * 0.6, extent * 0.6)
        self.ax.set_ylim(-extent * 0.6, extent * 0.6)

        self._artists: Dict[str, object] = {}
        pc_cells = PolyCollection([], edgecolors=[STYLE["cell_edge"]], linewidths=0.5)
        self.ax.add_collection(pc_cells)
        self._artists["cells"] = pc_cells
        self._artists["pieces"] = self.ax.scatter([], [], zorder=3)

        self.fig.canvas.mpl_connect("key_press_event", self._on_key)
        self.fig.canvas.mpl_connect("motion_notify_event", self._on_move)

        self.timer = self.fig.canvas.new_timer(interval=session.config.tick_interval_ms)
        self.timer.add_callback(self._on_tick)

    # --- drawing ---
    def _render_board(self):
        scale = self.session.scale
        if scale is None:
            return
        polys: List[np.ndarray] = []
        faces = []
        piece_xy = []
        piece_faces = []
        piece_edges = []
        for c, tile in self.session.board.iter_tiles():
            polys.append(triangle_corners(c, scale))
            faces.append(cell_color(c))
            if tile.piece is not None:
                piece_xy.append(world_coords(c, scale))
                face, edge = piece_style(tile.piece)
                piece_faces.append(face)
                piece_edges.append(edge)

        cells = self._artists["cells"]
        cells.set_verts(polys)
        cells.set_facecolors(faces)

        pieces = self._artists["pieces"]
        pieces.set_offsets(np.asarray(piece_xy, dtype=float).reshape(-1, 2))
        pieces.set_facecolors(piece_faces)
        pieces.set_edgecolors(piece_edges)
        pieces.set_linewidths(2.0)
        # marker size is in points^2; convert from data units
        diameter_pt = self._data_to_points(scale * PIECE_SIZE)
        pieces.set_sizes(np.full(len(piece_xy), diameter_pt ** 2))

        self.fig.canvas.draw_idle()

    def _data_to_points(self, length: float) -> float:
        x0, _ = self.ax.transData.transform((0.0, 0.0))
        x1, _ = self.ax.transData.transform((length, 0.0))
        return abs(x1 - x0) * 72.0 / self.fig.dpi

    # --- event handlers ---
    def _on_key(self, event):
        chars = key_to_chars(event.key)
        if chars:
            self.session.feed_chars(chars)

    def _on_move(self, event):
        if event.inaxes != self.ax or event.xdata is None:
            return
        self.session.feed_pointer((event.xdata, event.ydata))

    def _on_tick(self):
        if self.session.tick():
            self._render_board()

    def show(self):
        self._on_tick()
        self.timer.start()
        plt.show()
