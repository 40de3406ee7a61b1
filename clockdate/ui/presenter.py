"""Presenter base class shared by the overlay and terminal surfaces."""
from abc import ABC, abstractmethod
from typing import Sequence

from .layout import PlacedBlock


class Presenter(ABC):
    """Paints positioned, colored glyph blocks onto a display surface."""

    @abstractmethod
    def present(self, placed: Sequence[PlacedBlock]) -> None:
        """
        Redraw the surface.

        Args:
            placed: Blocks to draw, in painting order
        """
        pass

    @abstractmethod
    def run(self) -> None:
        """Drive the tick loop until the surface is closed."""
        pass

    def stop(self) -> None:
        """Release the surface."""
        pass

    def is_running(self) -> bool:
        return False
