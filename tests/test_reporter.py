import io
import json
import time

import pytest

from procwatch.logger import Logger
from procwatch.monitor.aggregator import Aggregator
from procwatch.monitor.history import History, Sample
from procwatch.monitor.reporter import Reporter


def _entries(buf):
    return [json.loads(line) for line in buf.getvalue().splitlines() if line]


def _nginx_history():
    h = History(30)
    h.add(Sample(name="nginx", pid=1, cpu_percent=15.0, memory_mb=100.0))
    h.add(Sample(name="nginx", pid=1, cpu_percent=25.0, memory_mb=200.0))
    return h


def test_emits_stats_log():
    buf = io.StringIO()
    r = Reporter(Aggregator(_nginx_history()), Logger(buf), ["nginx"], 0.01)
    r.start()
    time.sleep(0.1)
    r.stop()

    assert "process stats" in buf.getvalue()
    stats = [e for e in _entries(buf) if e["message"] == "process stats"]
    assert stats
    assert "avg_cpu" in stats[0]["fields"]
    assert "max_cpu" in stats[0]["fields"]


def test_report_values():
    buf = io.StringIO()
    r = Reporter(Aggregator(_nginx_history()), Logger(buf), ["nginx"], 1.0)
    r.report()
    (entry,) = _entries(buf)
    assert entry["level"] == "INFO"
    fields = entry["fields"]
    assert fields["process"] == "nginx"
    assert fields["pid"] == 1
    assert fields["avg_cpu"] == pytest.approx(20.0)
    assert fields["max_cpu"] == pytest.approx(25.0)
    assert fields["avg_mem_mb"] == pytest.approx(150.0)
    assert fields["max_mem_mb"] == pytest.approx(200.0)
    assert fields["sample_count"] == 2


def test_warn_on_missing_process():
    buf = io.StringIO()
    r = Reporter(Aggregator(History(30)), Logger(buf), ["missing"], 0.01)
    r.start()
    time.sleep(0.1)
    r.stop()

    assert "aggregation skipped" in buf.getvalue()
    entry = _entries(buf)[0]
    assert entry["level"] == "WARN"
    assert entry["fields"]["process"] == "missing"


def test_stop_is_idempotent_and_halts_output():
    buf = io.StringIO()
    r = Reporter(Aggregator(History(30)), Logger(buf), ["missing"], 0.005)
    r.start()
    time.sleep(0.03)
    r.stop()
    r.stop()
    size = len(buf.getvalue())
    time.sleep(0.05)
    assert len(buf.getvalue()) == size


def test_invalid_interval():
    with pytest.raises(ValueError):
        Reporter(Aggregator(History(30)), Logger(io.StringIO()), [], 0)