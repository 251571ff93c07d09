import time

from ride_booking.rate_limiter import RateLimiter


def test_allows_up_to_limit():
    limiter = RateLimiter(max_attempts=3, window_seconds=60)

    assert [limiter.check("10.0.0.1")[0] for _ in range(3)] == [True, True, True]
    allowed, retry_after = limiter.check("10.0.0.1")
    assert allowed is False
    assert 0 < retry_after <= 60


def test_addresses_are_independent():
    limiter = RateLimiter(max_attempts=1, window_seconds=60)

    assert limiter.check("10.0.0.1") == (True, None)
    assert limiter.check("10.0.0.1")[0] is False
    assert limiter.check("10.0.0.2") == (True, None)


def test_limiters_do_not_share_memory_counters():
    first = RateLimiter(max_attempts=1, window_seconds=60)
    second = RateLimiter(max_attempts=1, window_seconds=60)

    assert first.check("a") == (True, None)
    assert second.check("a") == (True, None)


def test_window_moves_on():
    limiter = RateLimiter(max_attempts=1, window_seconds=1)

    assert limiter.check("a") == (True, None)
    assert limiter.check("a")[0] is False

    time.sleep(1.2)
    assert limiter.check("a") == (True, None)
