import io
import os
import pty
import termios
from contextlib import contextmanager
from datetime import datetime

import pytest

from clockdate.core.clock_service import ClockService
from clockdate.core.glyph_renderer import GlyphBlock
from clockdate.core.logging_service import LoggingService
from clockdate.core.tick_scheduler import TickScheduler
from clockdate.ui.layout import PlacedBlock
from clockdate.ui.terminal_window import (
    CLEAR_SCREEN, ENTER_ALT_SCREEN, EXIT_ALT_SCREEN, RESET_STYLE, SHOW_CURSOR, TerminalWindow, move_cursor,
)
from clockdate.ui.theme import HexColor, NamedColor, Theme


THEME = Theme(NamedColor.BLUE, NamedColor.DARK_GRAY)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class ScriptedTerminal(TerminalWindow):
    """Terminal whose key wait advances a fake clock instead of blocking."""

    def __init__(self, clock_service, quit_after, render_cost=0.0):
        self.fake_clock = FakeClock()
        self.output = io.StringIO()
        super().__init__(
            clock_service, THEME, LoggingService('clockdate-test', 'WARNING'), TickScheduler(),
            stdin=io.StringIO(), stdout=self.output, clock=self.fake_clock, get_size=lambda: (80, 24),
        )
        self.quit_after = quit_after
        self.render_cost = render_cost
        self.refreshed_at = []
        self.timeouts = []

    @contextmanager
    def session(self):
        yield

    def poll_key(self, timeout):
        self.timeouts.append(timeout)
        if len(self.refreshed_at) >= self.quit_after:
            return 'q'
        # Wake up halfway through, as if an ignored key arrived
        self.fake_clock.now += timeout / 2 if len(self.timeouts) % 3 == 0 else timeout
        return 'x' if len(self.timeouts) % 3 == 0 else None

    def refresh(self):
        self.refreshed_at.append(self.fake_clock.now)
        super().refresh()
        self.fake_clock.now += self.render_cost


@pytest.fixture
def clock_service(time_font, date_font):
    return ClockService(time_font, date_font, now=lambda: datetime(2024, 11, 3, 14, 5))


def test_tick_cadence(clock_service):
    terminal = ScriptedTerminal(clock_service, quit_after=8)
    terminal.run()

    gaps = [b - a for a, b in zip(terminal.refreshed_at, terminal.refreshed_at[1:])]
    assert len(gaps) == 7
    assert all(gap == pytest.approx(0.25) for gap in gaps)
    assert all(timeout <= 0.25 for timeout in terminal.timeouts)


def test_tick_cadence_with_render_cost(clock_service):
    terminal = ScriptedTerminal(clock_service, quit_after=5, render_cost=0.05)
    terminal.run()

    gaps = [b - a for a, b in zip(terminal.refreshed_at, terminal.refreshed_at[1:])]
    assert all(gap == pytest.approx(0.25) for gap in gaps)


def test_quit_key_stops_before_next_tick(clock_service):
    terminal = ScriptedTerminal(clock_service, quit_after=1)
    terminal.run()
    assert len(terminal.refreshed_at) == 1


def test_frame_is_painted_to_stdout(clock_service):
    terminal = ScriptedTerminal(clock_service, quit_after=1)
    terminal.run()
    output = terminal.output.getvalue()
    assert output.startswith(CLEAR_SCREEN)
    assert '\x1b[34m' in output
    assert '\x1b[90m' in output
    assert '█' in output


def test_render_frame_positions_and_colors(clock_service):
    terminal = ScriptedTerminal(clock_service, quit_after=1)
    placed = [PlacedBlock('time', GlyphBlock(('ab', 'cd')), 3, 1, HexColor(1, 2, 3))]
    frame = terminal.render_frame(placed, 80, 24)
    assert frame == (
        CLEAR_SCREEN
        + move_cursor(1, 3) + '\x1b[38;2;1;2;3m' + 'ab' + RESET_STYLE
        + move_cursor(2, 3) + '\x1b[38;2;1;2;3m' + 'cd' + RESET_STYLE
    )


def test_render_frame_clips_to_screen(clock_service):
    terminal = ScriptedTerminal(clock_service, quit_after=1)
    placed = [
        PlacedBlock('time', GlyphBlock(('abcdef', 'ghijkl', 'mnopqr')), -2, -1, NamedColor.RED),
        PlacedBlock('date', GlyphBlock(('xyz',)), 4, 9, NamedColor.RED),
    ]
    frame = terminal.render_frame(placed, 5, 3)
    assert 'abcdef' not in frame
    assert move_cursor(0, 0) + '\x1b[31m' + 'ijkl' + RESET_STYLE in frame
    assert move_cursor(1, 0) + '\x1b[31m' + 'opqr' + RESET_STYLE in frame
    assert 'xyz' not in frame


def test_move_cursor_is_one_based():
    assert move_cursor(0, 0) == '\x1b[1;1H'
    assert move_cursor(4, 9) == '\x1b[5;10H'


@pytest.fixture
def pty_stdin():
    master, slave = pty.openpty()
    stdin = os.fdopen(slave, 'r')
    yield stdin
    stdin.close()
    os.close(master)


def test_session_restores_terminal_after_error(clock_service, pty_stdin):
    output = io.StringIO()
    terminal = TerminalWindow(
        clock_service, THEME, LoggingService('clockdate-test', 'WARNING'),
        stdin=pty_stdin, stdout=output,
    )
    saved = termios.tcgetattr(pty_stdin.fileno())

    with pytest.raises(RuntimeError):
        with terminal.session():
            assert not termios.tcgetattr(pty_stdin.fileno())[3] & termios.ICANON
            raise RuntimeError('render failed')

    assert termios.tcgetattr(pty_stdin.fileno()) == saved
    written = output.getvalue()
    assert written.startswith(ENTER_ALT_SCREEN)
    assert written.endswith(SHOW_CURSOR + EXIT_ALT_SCREEN)
