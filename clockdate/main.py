"""
Main entry points for clockdate
"""
import signal
import sys
from typing import Optional

from . import __version__
from .core.clock_service import ClockService
from .core.config_service import Config, ConfigService
from .core.glyph_font import FontError, load_embedded_fonts
from .core.logging_service import get_logger
from .core.tick_scheduler import TickScheduler
from .ui.presenter import Presenter
from .ui.theme import Theme


VARIANTS = ('overlay', 'terminal')


class Application:
    """
    Main application orchestrator.
    """

    def __init__(self, variant: str = 'overlay', config: Optional[Config] = None):
        """
        Initialize application.

        Args:
            variant: 'overlay' (desktop window) or 'terminal'
            config: Preloaded configuration (default: discover on disk)
        """
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {variant}")
        self._variant = variant

        # Load configuration
        self._config = config or ConfigService().load_or_default()

        # Initialize logging
        self._logger = get_logger('clockdate', self._config.logging.level, self._config.logging.file)
        self._logger.log_startup(__version__, variant, self._config.summary())

        self._clock_service: Optional[ClockService] = None
        self._presenter: Optional[Presenter] = None

    def _initialize_services(self) -> None:
        """Load fonts and build the clock service"""
        self._logger.info("Loading embedded fonts")
        time_font, date_font = load_embedded_fonts()
        self._logger.info(f"Fonts loaded: time height={time_font.height}, date height={date_font.height}")

        self._clock_service = ClockService(time_font, date_font)

    def _initialize_ui(self) -> None:
        """Create the presentation surface for the selected variant"""
        theme = Theme.from_config(self._config.colors)
        scheduler = TickScheduler()

        if self._variant == 'terminal':
            from .ui.terminal_window import TerminalWindow
            self._presenter = TerminalWindow(self._clock_service, theme, self._logger, scheduler)
        else:
            from .ui.overlay_window import OverlayWindow
            window = OverlayWindow(self._clock_service, theme, self._config, self._logger, scheduler)
            window.initialize()
            self._presenter = window

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown"""
        def signal_handler(signum, frame):
            self._logger.info(f"Received signal {signum}, shutting down")
            # SystemExit unwinds through the terminal session and restores it
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Process exit status
        """
        try:
            self._setup_signal_handlers()

            try:
                self._initialize_services()
            except FontError as e:
                self._logger.critical(f"Cannot load embedded fonts: {e}")
                return 1

            self._initialize_ui()
            self._logger.info("Application started successfully")

            self._presenter.run()

        except KeyboardInterrupt:
            self._logger.info("Keyboard interrupt received")
        except Exception as e:
            self._logger.critical(f"Fatal error: {e}", exc_info=True)
            raise
        finally:
            self.shutdown()

        return 0

    def shutdown(self) -> None:
        """Cleanup and shutdown"""
        if self._presenter and self._presenter.is_running():
            self._presenter.stop()
        self._logger.log_shutdown()


def main() -> None:
    """Overlay entry point"""
    sys.exit(Application('overlay').run())


def main_terminal() -> None:
    """Terminal entry point"""
    sys.exit(Application('terminal').run())


if __name__ == '__main__':
    main()
