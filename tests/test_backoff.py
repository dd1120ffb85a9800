import pytest

from videoplan.utils.backoff import RateLimiter, with_retry


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_rate_limiter_waits_for_window():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock, sleep=clock.sleep)
    limiter.set_limit("svc", 2, 10.0)

    assert limiter.wait_if_needed("svc") == 0.0
    clock.now = 4.0
    assert limiter.wait_if_needed("svc") == 0.0
    assert limiter.get_remaining("svc") == 0

    clock.now = 5.0
    assert limiter.wait_if_needed("svc") == pytest.approx(5.0)
    assert clock.sleeps == [pytest.approx(5.0)]


def test_rate_limiter_reset_and_default_limit():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock, sleep=clock.sleep)
    limiter.wait_if_needed("otro")
    assert limiter.get_remaining("otro") == 59
    assert limiter.get_remaining("asset_service") == 20
    limiter.reset()
    assert limiter.get_remaining("otro") == 60


def test_with_retry_reraises_after_attempts():
    calls = []

    @with_retry(max_attempts=3, min_wait=0, multiplier=0, exceptions=(ConnectionError,))
    def flaky():
        calls.append(1)
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        flaky()
    assert len(calls) == 3


def test_with_retry_does_not_retry_other_errors():
    calls = []

    @with_retry(max_attempts=3, min_wait=0, multiplier=0, exceptions=(ConnectionError,))
    def broken():
        calls.append(1)
        raise KeyError("x")

    with pytest.raises(KeyError):
        broken()
    assert len(calls) == 1
