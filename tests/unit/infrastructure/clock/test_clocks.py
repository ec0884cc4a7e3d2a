import time

from fscache.infrastructure.clock.clocks import CoarseClock, HighResolutionClock, create_clock


def test_create_clock_selects_implementation():
    assert isinstance(create_clock(), HighResolutionClock)
    assert isinstance(create_clock(high_resolution=True), HighResolutionClock)
    assert isinstance(create_clock(high_resolution=False), CoarseClock)


def test_clocks_share_the_epoch_domain():
    """Both clocks report epoch seconds so persisted expiry stays comparable."""
    reference = time.time()
    assert abs(HighResolutionClock().now() - reference) < 5
    assert abs(CoarseClock().now() - reference) < 5


def test_high_resolution_clock_is_non_decreasing():
    clock = HighResolutionClock()
    readings = [clock.now() for _ in range(1000)]
    assert readings == sorted(readings)
