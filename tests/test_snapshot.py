from datetime import datetime, timedelta, timezone

from procwatch.monitor.snapshot import Snapshot, SnapshotEntry, SnapshotStore


def make_snapshot(ts, *names):
    entries = {
        n: SnapshotEntry(
            name=n,
            pid=1000 + i,
            avg_cpu=i * 1.5,
            avg_memory=i * 1024 * 1024,
            samples=3,
        )
        for i, n in enumerate(names)
    }
    return Snapshot(timestamp=ts, entries=entries)


def test_default_capacity():
    assert SnapshotStore(0).capacity == 10


def test_empty_latest():
    assert SnapshotStore(5).latest() is None


def test_add_and_latest():
    store = SnapshotStore(5)
    now = datetime.now(timezone.utc)
    store.add(make_snapshot(now, "nginx"))
    got = store.latest()
    assert got is not None
    assert got.timestamp == now
    assert "nginx" in got.entries


def test_ring_eviction():
    store = SnapshotStore(3)
    base = datetime.now(timezone.utc)
    for i in range(5):
        store.add(make_snapshot(base + timedelta(seconds=i), "proc"))
    assert len(store) == 3
    assert store.latest().timestamp == base + timedelta(seconds=4)
    assert [s.timestamp for s in store.all()] == [
        base + timedelta(seconds=i) for i in (2, 3, 4)
    ]


def test_all_order():
    store = SnapshotStore(4)
    base = datetime.now(timezone.utc)
    times = [base, base + timedelta(seconds=1), base + timedelta(seconds=2)]
    for ts in times:
        store.add(make_snapshot(ts, "app"))
    assert [s.timestamp for s in store.all()] == times


def test_entry_str():
    entry = SnapshotEntry(name="nginx", pid=42, avg_cpu=12.5, avg_memory=52428800, samples=5)
    assert str(entry) == "nginx(pid=42) cpu=12.50% mem=50.00MB samples=5"