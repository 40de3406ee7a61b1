"""
Clock Service - Wall clock sampling and glyph rendering
Produces the render state consumed by every presentation surface
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .glyph_font import GlyphFont
from .glyph_renderer import GlyphBlock, render_text


TIME_FORMAT = '%H:%M'
DATE_FORMAT = '%d.%m.%Y'


@dataclass(frozen=True)
class RenderState:
    """Glyph blocks rendered for one tick."""
    timestamp: datetime
    time_text: str
    date_text: str
    time_block: GlyphBlock
    date_block: GlyphBlock


class ClockService:
    """
    Samples local time and renders it through the time and date fonts.
    """

    def __init__(
        self,
        time_font: GlyphFont,
        date_font: GlyphFont,
        now: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize clock service.

        Args:
            time_font: Font for the HH:MM block
            date_font: Font for the DD.MM.YYYY block
            now: Wall clock source returning local time
        """
        self._time_font = time_font
        self._date_font = date_font
        self._now = now
        self._latest: Optional[RenderState] = None

    def get_current_time(self) -> datetime:
        """Get current local time"""
        return self._now()

    @staticmethod
    def format_time(now: datetime) -> str:
        """24-hour, zero padded, e.g. '14:05'"""
        return now.strftime(TIME_FORMAT)

    @staticmethod
    def format_date(now: datetime) -> str:
        """Zero padded day and month, 4-digit year, e.g. '03.11.2024'"""
        return f"{now.day:02d}.{now.month:02d}.{now.year:04d}"

    def tick(self, now: Optional[datetime] = None) -> RenderState:
        """
        Render the current time and date and keep them as the latest state.

        Args:
            now: Timestamp to render (default: sample the wall clock)

        Returns:
            The new RenderState
        """
        if now is None:
            now = self.get_current_time()

        time_text = self.format_time(now)
        date_text = self.format_date(now)
        state = RenderState(
            timestamp=now,
            time_text=time_text,
            date_text=date_text,
            time_block=render_text(self._time_font, time_text),
            date_block=render_text(self._date_font, date_text),
        )
        self._latest = state
        return state

    @property
    def latest(self) -> Optional[RenderState]:
        """Most recent render state (None before the first tick)"""
        return self._latest
