"""
Time sources for TOTP.

Generators read "now" through a clock object so tests can pin time
without patching the time module.
"""

import time

from ..config import TOTP_TIME_STEP


def time_slice(timestamp: float, time_step: int = TOTP_TIME_STEP) -> int:
    """
    Get the time counter for a timestamp.

    Args:
        timestamp: Unix timestamp in seconds
        time_step: Time step in seconds

    Returns:
        Time counter (T = floor(time / time_step))
    """
    return int(timestamp // time_step)


class SystemClock:
    """Wall-clock time."""

    def now(self) -> float:
        return time.time()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """
    Clock frozen at a given timestamp.

    Example:
        >>> clock = FixedClock(59)
        >>> time_slice(clock.now())
        1
    """

    def __init__(self, timestamp: float):
        self.timestamp = timestamp

    def now(self) -> float:
        return self.timestamp

    def advance(self, seconds: float) -> None:
        """Move the clock forward (or back, for negative seconds)."""
        self.timestamp += seconds

    def __repr__(self) -> str:
        return f"FixedClock({self.timestamp!r})"
