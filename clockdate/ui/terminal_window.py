"""
Terminal Window - Full-screen terminal clock with quit key handling
"""
import select
import shutil
import sys
import termios
import time
import tty
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence, TextIO, Tuple

from ..core.clock_service import ClockService
from ..core.logging_service import LoggingService
from ..core.tick_scheduler import TickScheduler
from .layout import Layout, PlacedBlock
from .presenter import Presenter
from .theme import Theme, ansi_foreground


ENTER_ALT_SCREEN = '\x1b[?1049h'
EXIT_ALT_SCREEN = '\x1b[?1049l'
HIDE_CURSOR = '\x1b[?25l'
SHOW_CURSOR = '\x1b[?25h'
CLEAR_SCREEN = '\x1b[2J'
RESET_STYLE = '\x1b[0m'

QUIT_KEYS = ('q',)


def move_cursor(row: int, column: int) -> str:
    """CUP escape for a zero-based cell"""
    return f"\x1b[{row + 1};{column + 1}H"


def terminal_size() -> Tuple[int, int]:
    """Current (columns, rows)"""
    size = shutil.get_terminal_size()
    return size.columns, size.lines


class TerminalWindow(Presenter):
    """
    Draws the clock on the alternate screen and polls for the quit key.
    """

    def __init__(
        self,
        clock_service: ClockService,
        theme: Theme,
        logger: LoggingService,
        scheduler: Optional[TickScheduler] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        clock: Callable[[], float] = time.monotonic,
        get_size: Callable[[], Tuple[int, int]] = terminal_size
    ):
        """
        Initialize terminal window.

        Args:
            clock_service: Renders the glyph blocks
            theme: Resolved colors
            logger: Logging service
            scheduler: Tick timing
            stdin: Key input stream (default: sys.stdin)
            stdout: Output stream (default: sys.stdout)
            clock: Monotonic time source in seconds
            get_size: Returns (columns, rows) of the terminal
        """
        self._clock_service = clock_service
        self._theme = theme
        self._logger = logger
        self._scheduler = scheduler or TickScheduler()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._clock = clock
        self._get_size = get_size

        # Terminal cells have no pixel canvas; regions drive placement
        self._layout = Layout(0)

    @contextmanager
    def session(self) -> Iterator[None]:
        """
        Enter cbreak mode and the alternate screen, restoring both on exit.

        Raises:
            termios.error: If stdin is not a terminal
        """
        fd = self._stdin.fileno()
        saved = termios.tcgetattr(fd)
        try:
            tty.setcbreak(fd)
            self._stdout.write(ENTER_ALT_SCREEN + HIDE_CURSOR)
            self._stdout.flush()
            yield
        finally:
            self._stdout.write(RESET_STYLE + SHOW_CURSOR + EXIT_ALT_SCREEN)
            self._stdout.flush()
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)

    def poll_key(self, timeout: float) -> Optional[str]:
        """
        Wait up to ``timeout`` seconds for one key.

        Returns:
            The key, or None if the wait timed out
        """
        ready, _, _ = select.select([self._stdin], [], [], timeout)
        if ready:
            return self._stdin.read(1)
        return None

    def compose(self, columns: int, rows: int) -> List[PlacedBlock]:
        """Render a new tick and place it for a terminal of the given size"""
        state = self._clock_service.tick()
        return self._layout.place_in_regions(state.time_block, state.date_block, self._theme, columns, rows)

    def render_frame(self, placed: Sequence[PlacedBlock], columns: int, rows: int) -> str:
        """
        Build the escape sequence string that paints one frame.

        Cells outside the terminal are clipped.
        """
        parts = [CLEAR_SCREEN]
        for item in placed:
            color = ansi_foreground(item.color)
            for offset, line in enumerate(item.block.rows):
                y = item.y + offset
                if not 0 <= y < rows:
                    continue
                x = item.x
                if x < 0:
                    line = line[-x:]
                    x = 0
                line = line[:max(0, columns - x)]
                if not line:
                    continue
                parts.append(f"{move_cursor(y, x)}{color}{line}{RESET_STYLE}")
        return ''.join(parts)

    def present(self, placed: Sequence[PlacedBlock]) -> None:
        columns, rows = self._get_size()
        self._stdout.write(self.render_frame(placed, columns, rows))
        self._stdout.flush()

    def refresh(self) -> None:
        """Render the current time and redraw"""
        columns, rows = self._get_size()
        self.present(self.compose(columns, rows))

    def loop(self) -> None:
        """
        Tick until a quit key arrives.

        The key wait and the tick cadence share one timeout; the tick
        reference only moves once a full interval has elapsed.
        """
        last_tick = self._clock()
        self.refresh()

        while True:
            key = self.poll_key(self._scheduler.timeout(last_tick, self._clock()))
            if key in QUIT_KEYS:
                self._logger.info("Quit key pressed")
                return

            now = self._clock()
            if self._scheduler.is_due(last_tick, now):
                self.refresh()
                last_tick = now

    def run(self) -> None:
        """Run the clock inside a terminal session"""
        self._logger.info("Starting terminal clock (press 'q' to quit)")
        with self.session():
            self.loop()
