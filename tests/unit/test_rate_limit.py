import threading

import pytest

from wacdo.services.rate_limit import TokenBucket


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_burst_is_admitted_then_rejected():
    bucket = TokenBucket(rate=3, burst=3, clock=FakeClock())

    assert [bucket.allow() for _ in range(4)] == [True, True, True, False]


def test_tokens_refill_over_time():
    clock = FakeClock()
    bucket = TokenBucket(rate=2, burst=2, clock=clock)
    assert bucket.allow() and bucket.allow()
    assert not bucket.allow()

    clock.now += 0.5

    assert bucket.allow()
    assert not bucket.allow()


def test_refill_never_exceeds_burst():
    clock = FakeClock()
    bucket = TokenBucket(rate=5, burst=2, clock=clock)

    clock.now += 60

    assert [bucket.allow() for _ in range(3)] == [True, True, False]


def test_clock_going_backwards_does_not_add_tokens():
    clock = FakeClock()
    bucket = TokenBucket(rate=1, burst=1, clock=clock)
    assert bucket.allow()

    clock.now -= 10

    assert not bucket.allow()


@pytest.mark.parametrize("rate, burst", [(0, 1), (1, 0), (-1, 5)])
def test_non_positive_parameters_are_rejected(rate, burst):
    with pytest.raises(ValueError):
        TokenBucket(rate=rate, burst=burst)


def test_bucket_is_shared_safely_between_threads():
    bucket = TokenBucket(rate=10, burst=10, clock=FakeClock())
    admitted = []
    lock = threading.Lock()

    def worker():
        result = bucket.allow()
        with lock:
            admitted.append(result)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert admitted.count(True) == 10
    assert admitted.count(False) == 40
