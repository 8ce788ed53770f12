import threading

import pytest

from procwatch.monitor.history import History, Sample


def make_sample(name, cpu, mem):
    return Sample(name=name, cpu_percent=cpu, memory_mb=mem, pid=1234)


def test_default_window():
    assert History(0).window_size == 60


def test_add_and_latest():
    h = History(10)
    h.add(make_sample("nginx", 10.0, 50.0))
    h.add(make_sample("nginx", 20.0, 60.0))
    latest = h.latest("nginx")
    assert latest is not None
    assert latest.cpu_percent == 20.0


def test_latest_missing():
    assert History(10).latest("ghost") is None


def test_window_eviction():
    h = History(3)
    for i in range(5):
        h.add(make_sample("svc", float(i), float(i)))
    samples = h.all("svc")
    assert len(samples) == 3
    assert samples[0].cpu_percent == 2.0
    assert [s.cpu_percent for s in samples] == [2.0, 3.0, 4.0]


def test_average_cpu():
    h = History(10)
    for cpu in (10.0, 20.0, 30.0):
        h.add(make_sample("app", cpu, 0))
    assert h.average_cpu("app") == 20.0


def test_average_memory():
    h = History(10)
    h.add(make_sample("app", 0, 100.0))
    h.add(make_sample("app", 0, 200.0))
    assert h.average_memory("app") == 150.0


def test_average_cpu_empty():
    assert History(10).average_cpu("nobody") == 0


def test_average_memory_empty():
    assert History(10).average_memory("nobody") == 0


def test_all_returns_copy():
    h = History(10)
    h.add(make_sample("svc", 5.0, 10.0))
    out = h.all("svc")
    out.clear()
    assert len(h.all("svc")) == 1
    assert h.latest("svc").cpu_percent == 5.0


def test_sample_is_immutable():
    h = History(10)
    s = make_sample("svc", 5.0, 10.0)
    h.add(s)
    with pytest.raises(AttributeError):
        s.cpu_percent = 999
    assert s.cpu_percent == 5.0
    assert h.latest("svc").cpu_percent == 5.0


def test_all_unknown_is_empty():
    assert History(5).all("nobody") == []


def test_concurrent_access():
    h = History(20)
    done = threading.Event()

    def writer():
        for i in range(100):
            h.add(Sample(name="worker", pid=42, cpu_percent=float(i % 100), memory_mb=float(i * 2)))
        done.set()

    def reader():
        while not done.is_set():
            h.latest("worker")
            h.average_cpu("worker")
            h.average_memory("worker")
            h.all("worker")

    threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    samples = h.all("worker")
    assert len(samples) == 20
    assert samples[-1].cpu_percent == 99.0


def test_multiple_processes():
    h = History(5)
    for i in range(3):
        h.add(make_sample("alpha", float(i + 1), 0))
        h.add(make_sample("beta", float((i + 1) * 10), 0))
    assert h.average_cpu("alpha") == 2.0
    assert h.average_cpu("beta") == 20.0
    assert len(h.all("alpha")) == 3
    assert len(h.all("beta")) == 3