"""
Tick Scheduler - Fixed-interval tick arithmetic
Host-agnostic: works under an event loop timer or a blocking poll loop
"""

TICK_INTERVAL = 0.25  # seconds


class TickScheduler:
    """
    Decides when the next tick is due.

    Timestamps are plain floats from a monotonic clock, in seconds.
    """

    def __init__(self, interval: float = TICK_INTERVAL):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self._interval = interval

    def is_due(self, last_tick: float, now: float) -> bool:
        """True once a full interval has elapsed since ``last_tick``"""
        return now - last_tick >= self._interval

    def timeout(self, last_tick: float, now: float) -> float:
        """Seconds left in the current tick budget (never negative)"""
        return max(0.0, self._interval - (now - last_tick))

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def interval_ms(self) -> int:
        """Interval in whole milliseconds, for timer APIs such as Tk.after"""
        return int(round(self._interval * 1000))
