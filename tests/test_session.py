"""Tests for the action queue and the per-tick loop."""

import io

import pytest

from trifold.board import GameBoard, Piece
from trifold.commands import MoveAction, SetAction, ShearAction
from trifold.config import GameConfig
from trifold.session import ActionQueue, GameSession, RenderFlag, apply_action
from trifold.trigrid import Coord, texture_coords


class TestActionQueue:
    def test_fifo(self) -> None:
        q = ActionQueue()
        a = MoveAction(Coord(0, 0), Coord(1, 0))
        b = ShearAction(Coord(0, 0), Coord(2, 0))
        q.push(a)
        q.push(b)
        assert len(q) == 2
        assert q.drain() == [a, b]
        assert len(q) == 0
        assert q.drain() == []


class TestRenderFlag:
    def test_counts_and_consumes(self) -> None:
        flag = RenderFlag()
        flag.raise_signal()
        flag.raise_signal()
        assert flag.count == 2
        assert flag.consume() is True
        assert flag.consume() is False

    def test_initially_raised(self) -> None:
        assert RenderFlag(raised=True).consume() is True


class TestApplyAction:
    def test_dispatch(self, board: GameBoard) -> None:
        assert apply_action(board, SetAction(Coord(0, 0), Piece.red())) is True
        assert apply_action(board, SetAction(Coord(0, 9), Piece.red())) is False
        assert apply_action(board, MoveAction(Coord(0, 9), Coord(0, 0))) is True
        assert apply_action(board, ShearAction(Coord(0, 0), Coord(1, 0))) is False

    def test_rejects_non_action(self, board: GameBoard) -> None:
        with pytest.raises(TypeError):
            apply_action(board, "move 0,0 1,0")


class TestTick:
    def test_first_tick_renders(self, session: GameSession) -> None:
        assert session.scale is None
        assert session.tick() is True
        assert session.scale == pytest.approx(session.board.display_scale(600.0))
        assert session.tick() is False

    def test_typed_command_applied(self, session: GameSession, echo_stream: io.StringIO) -> None:
        session.tick()
        session.feed_chars("set 0,0 red-special")
        assert session.tick() is False
        assert echo_stream.getvalue().endswith("\rset 0,0 red-special\x1b[J")
        session.feed_chars("\r")
        assert session.tick() is True
        assert session.board.get_tile((0, 0)).piece == Piece.red(True)
        # the submitted line is cleared from the echo
        assert echo_stream.getvalue().endswith("\r\x1b[J")

    def test_partial_line_not_applied(self, session: GameSession) -> None:
        session.tick()
        session.feed_chars("set 0,0 red")
        assert session.tick() is False
        assert session.board.get_tile((0, 0)).piece is None

    def test_several_actions_one_refresh(self, session: GameSession, monkeypatch) -> None:
        session.tick()
        calls = []
        original = session.board.recenter
        monkeypatch.setattr(session.board, "recenter", lambda: calls.append(1) or original())
        session.feed_line("move 0,-3 0,0")
        session.feed_line("shear 0,0 2,0")
        session.feed_line("set 1,1 empty")
        assert session.tick() is True
        assert calls == [1]

    def test_actions_applied_in_order(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("set 0,0 blue")
        session.feed_line("move 0,0 1,0")
        session.tick()
        assert session.board.get_tile((0, 0)).piece is None
        assert session.board.get_tile((1, 0)).piece == Piece.blue()

    def test_set_on_missing_cell_no_refresh(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("set 20,20 blue")
        assert session.tick() is False

    def test_move_on_missing_cell_refreshes(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("move 20,20 0,0")
        assert session.tick() is True

    def test_rejected_shear_no_refresh(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("shear 0,0 1,0")
        assert session.tick() is False

    def test_identity_shear_refreshes(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("shear 0,0 0,0")
        assert session.tick() is True

    def test_malformed_line_dropped(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("move abc")
        assert session.tick() is False
        assert len(session.queue) == 0

    def test_shear_then_recenter(self, session: GameSession) -> None:
        session.tick()
        session.feed_line("shear 0,0 4,0")
        session.tick()
        (min_x, max_x), _ = session.board.bounding_box()
        # rows y <= 0 moved right by 4; recentering pulls the board back
        assert (min_x + max_x) // 4 == 0
        assert len(session.board) == 54

    def test_submit_returns_action(self, session: GameSession) -> None:
        assert session.submit("move 0,0 1,0") == MoveAction(Coord(0, 0), Coord(1, 0))
        assert session.submit("nonsense") is None
        assert len(session.queue) == 1


class TestHover:
    def test_hover_echoes_cell(self, session: GameSession, echo_stream: io.StringIO) -> None:
        session.tick()
        session.feed_pointer(texture_coords(Coord(2, -1), session.scale))
        session.tick()
        assert echo_stream.getvalue().endswith("\r2,-1\x1b[J")
        assert session.hit_tester.last == Coord(2, -1)

    def test_hover_only_when_moved(self, session: GameSession) -> None:
        session.tick()
        session.feed_pointer((0.0, 0.0))
        session.tick()
        assert session.hover() is None

    def test_hover_does_not_mutate(self, session: GameSession) -> None:
        session.tick()
        before = {c: t.piece for c, t in session.board.iter_tiles()}
        session.feed_pointer((10.0, -20.0))
        assert session.tick() is False
        assert {c: t.piece for c, t in session.board.iter_tiles()} == before

    def test_no_echo_when_disabled(self) -> None:
        out = io.StringIO()
        s = GameSession(GameBoard(), GameConfig(echo=False), stream=out)
        s.tick()
        s.feed_chars("ab")
        s.feed_pointer((0.0, 0.0))
        s.tick()
        assert out.getvalue() == ""


class TestApplyLogging:
    def test_log_reports_signal(self, session: GameSession, caplog) -> None:
        session.tick()
        session.feed_line("shear 0,0 3,1")
        session.feed_line("set 0,0 red")
        with caplog.at_level("DEBUG", logger="trifold.session"):
            session.tick()
        applied = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Applied")]
        assert applied == ["Applied shear 0,0 3,1 (signal=False)", "Applied set 0,0 red (signal=True)"]
