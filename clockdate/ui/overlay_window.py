"""
Overlay Window - Borderless always-on-top Tkinter clock overlay
"""
import sys
import tkinter as tk
from typing import Dict, List, Optional, Sequence

from PIL import Image, ImageDraw, ImageTk

from ..core.clock_service import ClockService, RenderState
from ..core.config_service import Config
from ..core.logging_service import LoggingService
from ..core.tick_scheduler import TickScheduler
from .ink import InkMeasurer, find_monospace_font
from .layout import Layout, PlacedBlock
from .presenter import Presenter
from .theme import Theme, to_rgb


# Background color keyed out as transparent where the platform allows it
TRANSPARENT_KEY = '#010101'


class OverlayWindow(Presenter):
    """
    Top-right anchored overlay that repaints the clock every tick.
    """

    def __init__(
        self,
        clock_service: ClockService,
        theme: Theme,
        config: Config,
        logger: LoggingService,
        scheduler: Optional[TickScheduler] = None
    ):
        """
        Initialize overlay window.

        Args:
            clock_service: Renders the glyph blocks
            theme: Resolved colors
            config: Application configuration
            logger: Logging service
            scheduler: Tick interval source
        """
        self._clock = clock_service
        self._theme = theme
        self._window = config.window
        self._logger = logger
        self._scheduler = scheduler or TickScheduler()

        self._layout = Layout(self._window.width, self._window.date_vertical_offset)

        font_file = find_monospace_font()
        if font_file:
            self._logger.info(f"Using monospace font: {font_file}")
        else:
            self._logger.warning("No monospace TrueType font found, using Pillow default font")
        self._ink: Dict[str, InkMeasurer] = {
            'time': InkMeasurer(config.fonts.time_size, font_file),
            'date': InkMeasurer(config.fonts.date_size, font_file),
        }

        self._root: Optional[tk.Tk] = None
        self._label: Optional[tk.Label] = None
        self._photo: Optional[ImageTk.PhotoImage] = None
        self._running = False

    def initialize(self) -> None:
        """Create the borderless overlay window"""
        self._logger.info("Initializing overlay window")

        self._root = tk.Tk()
        self._root.title("Clock & Date")
        self._root.overrideredirect(True)
        self._root.attributes('-topmost', True)
        self._root.configure(bg=TRANSPARENT_KEY)
        self._apply_transparency()

        screen_width = self._root.winfo_screenwidth()
        x = screen_width - self._window.width - self._window.margin_right
        y = self._window.margin_top
        self._root.geometry(f"{self._window.width}x{self._window.height}+{x}+{y}")

        self._logger.info(
            f"Requested display '{self._window.target_display}'; "
            "Tk cannot select monitors by connector, using the default screen"
        )

        self._label = tk.Label(self._root, bd=0, highlightthickness=0, bg=TRANSPARENT_KEY)
        self._label.pack(fill=tk.BOTH, expand=True)

        self._root.protocol("WM_DELETE_WINDOW", self.stop)

        self._logger.info(f"Overlay initialized: {self._window.width}x{self._window.height}+{x}+{y}")

    def _apply_transparency(self) -> None:
        """Key out the background color where the platform supports it"""
        try:
            if sys.platform.startswith('win'):
                self._root.attributes('-transparentcolor', TRANSPARENT_KEY)
            elif sys.platform == 'darwin':
                self._root.attributes('-transparent', True)
                self._root.configure(bg='systemTransparent')
            else:
                self._logger.info(
                    f"Tk on {sys.platform} has no per-pixel transparency; "
                    f"the overlay background stays opaque ({TRANSPARENT_KEY})"
                )
        except tk.TclError as e:
            self._logger.warning(f"Transparency not supported: {e}")

    def compose(self, state: RenderState) -> List[PlacedBlock]:
        """
        Measure ink extents and position both blocks on the canvas.

        Args:
            state: Latest render state

        Returns:
            Placed blocks for present()
        """
        return self._layout.place(
            state.time_block,
            state.date_block,
            self._theme,
            time_size=self._ink['time'].measure(state.time_block),
            date_size=self._ink['date'].measure(state.date_block),
        )

    def render_image(self, placed: Sequence[PlacedBlock]) -> Image.Image:
        """Paint placed blocks onto a fresh canvas image"""
        image = Image.new('RGB', (self._window.width, self._window.height), TRANSPARENT_KEY)
        draw = ImageDraw.Draw(image)
        for item in placed:
            self._ink[item.role].draw(draw, item.block, (item.x, item.y), to_rgb(item.color))
        return image

    def present(self, placed: Sequence[PlacedBlock]) -> None:
        """Swap the displayed image for a freshly painted one"""
        self._photo = ImageTk.PhotoImage(self.render_image(placed))
        self._label.configure(image=self._photo)

    def _tick(self) -> None:
        """Render, redraw and re-arm the timer"""
        if not self._running:
            return

        try:
            state = self._clock.tick()
            self.present(self.compose(state))
        except Exception as e:
            self._logger.error(f"Overlay update error: {e}", exc_info=True)

        if self._running and self._root:
            self._root.after(self._scheduler.interval_ms, self._tick)

    def run(self) -> None:
        """Start the Tk event loop (blocking)"""
        if not self._root:
            self.initialize()

        self._logger.info("Starting overlay event loop")
        self._running = True
        self._tick()
        self._root.mainloop()

    def stop(self) -> None:
        """Stop ticking and destroy the window"""
        self._logger.info("Stopping overlay")
        self._running = False

        if self._root:
            try:
                self._root.quit()
                self._root.destroy()
            except tk.TclError as e:
                self._logger.error(f"Error during overlay cleanup: {e}")

        self._root = None

    def is_running(self) -> bool:
        return self._running
