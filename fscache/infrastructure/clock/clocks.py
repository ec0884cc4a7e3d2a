"""Clock implementations.

Both clocks count seconds since the Unix epoch, so expiry stamps written by
one process run stay meaningful to the next one.
"""

import logging
import time

from fscache.domain.interfaces.clock import Clock

logger = logging.getLogger(__name__)


class HighResolutionClock(Clock):
    """Nanosecond-resolution clock built on time.time_ns()."""

    def now(self) -> float:
        return time.time_ns() * 1e-9


class CoarseClock(Clock):
    """Float-seconds clock built on time.time()."""

    def now(self) -> float:
        return time.time()


def create_clock(high_resolution: bool = True) -> Clock:
    """Selects the clock implementation once, at construction time."""
    clock = HighResolutionClock() if high_resolution else CoarseClock()
    logger.debug(f"Using {clock.__class__.__name__}")
    return clock
