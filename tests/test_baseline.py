import threading
import time

import pytest

from procwatch.monitor.baseline import BaselineStats, BaselineTracker


def test_default_window():
    assert BaselineTracker(0).window == 600


def test_no_samples():
    assert BaselineTracker(300).compute("myapp") is None


def test_single_sample():
    bt = BaselineTracker(300)
    bt.add("myapp", 12.5, 256 * 1024 * 1024)
    stats = bt.compute("myapp")
    assert stats is not None
    assert stats.avg_cpu == 12.5
    assert stats.samples == 1
    assert stats.std_cpu == 0.0


def test_multi_sample_avg():
    bt = BaselineTracker(300)
    bt.add("svc", 10.0, 100)
    bt.add("svc", 20.0, 200)
    bt.add("svc", 30.0, 300)
    stats = bt.compute("svc")
    assert stats.avg_cpu == 20.0
    assert stats.avg_memory == 200.0
    assert stats.samples == 3


def test_standard_deviation():
    bt = BaselineTracker(300)
    for cpu in (2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0):
        bt.add("svc", cpu, 0.0)
    stats = bt.compute("svc")
    assert stats.std_cpu == pytest.approx(2.0)
    assert stats.std_memory == 0.0


def test_window_eviction():
    bt = BaselineTracker(0.05)
    bt.add("proc", 99.0, 999)
    time.sleep(0.08)
    bt.add("proc", 1.0, 1)
    stats = bt.compute("proc")
    assert stats.samples == 1
    assert stats.avg_cpu == 1.0


def test_reset():
    bt = BaselineTracker(300)
    bt.add("app", 50.0, 512)
    bt.reset("app")
    assert bt.compute("app") is None


def test_reset_unknown_leaves_others():
    bt = BaselineTracker(300)
    bt.add("app", 50.0, 512)
    bt.reset("other")
    assert bt.compute("app").samples == 1


def test_stats_string():
    s = BaselineStats(avg_cpu=23.5, avg_memory=256 * 1024 * 1024, samples=42)
    assert str(s) == "baseline: avg_cpu=23.50% avg_mem=256.00MB samples=42"


def test_concurrent_add():
    bt = BaselineTracker(60)
    workers, iterations = 20, 50

    def work(ident):
        for j in range(iterations):
            bt.add("shared", ident + j * 0.1, float(ident * 1024))

    threads = [threading.Thread(target=work, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert bt.compute("shared").samples == workers * iterations


def test_multiple_processes_concurrent():
    bt = BaselineTracker(60)
    names = ["alpha", "beta", "gamma", "delta"]

    def work(name):
        for i in range(30):
            bt.add(name, float(i), float(i * 512))

    threads = [threading.Thread(target=work, args=(n,)) for n in names]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    for name in names:
        stats = bt.compute(name)
        assert stats.samples == 30
        assert stats.avg_cpu == 14.5