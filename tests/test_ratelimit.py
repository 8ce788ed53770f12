import time

from procwatch.monitor.ratelimit import RateLimit


def test_allows_up_to_burst():
    rl = RateLimit(3, 60)
    assert [rl.allow("nginx") for _ in range(3)] == [True, True, True]


def test_blocks_after_burst():
    rl = RateLimit(2, 60)
    rl.allow("nginx")
    rl.allow("nginx")
    assert rl.allow("nginx") is False


def test_independent_processes():
    rl = RateLimit(1, 60)
    assert rl.allow("nginx") is True
    assert rl.allow("redis") is True
    assert rl.allow("nginx") is False


def test_resets_after_window():
    rl = RateLimit(1, 0.05)
    assert rl.allow("svc") is True
    assert rl.allow("svc") is False
    time.sleep(0.06)
    assert rl.allow("svc") is True


def test_remaining():
    rl = RateLimit(3, 60)
    assert rl.remaining("svc") == 3
    rl.allow("svc")
    assert rl.remaining("svc") == 2
    rl.allow("svc")
    rl.allow("svc")
    assert rl.remaining("svc") == 0


def test_remaining_after_window():
    rl = RateLimit(2, 0.05)
    rl.allow("svc")
    time.sleep(0.06)
    assert rl.remaining("svc") == 2


def test_reset():
    rl = RateLimit(1, 60)
    rl.allow("svc")
    assert rl.allow("svc") is False
    rl.reset("svc")
    assert rl.allow("svc") is True


def test_defaults():
    rl = RateLimit(0, 0)
    assert rl.max_burst == 3
    assert rl.window == 60