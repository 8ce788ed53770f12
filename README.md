# procwatch

procwatch is a library of building blocks for watching processes by name
and reacting when their CPU or memory use crosses configured limits. It
reads per-process figures from a `/proc` tree, keeps rolling history, and
offers aggregation, baselines, anomaly and trend detection, alert
throttling and alert delivery. It has no dependencies outside the
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`procwatch.config.load(path)` reads a JSON file such as:

```json
{
  "poll_interval_seconds": 10,
  "log_level": "info",
  "log_format": "json",
  "processes": [
    {"name": "nginx", "cpu_threshold_percent": 80, "mem_threshold_mb": 512}
  ]
}
```

It returns a `Config` holding a list of `ProcessConfig` objects (`name`,
`pid_file`, `cpu_threshold`, `mem_threshold`). A `ConfigError` is raised
when the file cannot be opened or decoded, when a field has the wrong
type, when no process is listed, when a process has no name, or when a
CPU threshold lies outside 0 to 100. Missing values default to a poll
interval of 5 seconds (`Config.poll_interval` is a `timedelta`), log
format `json` and log level `info`.

## Logging

`procwatch.logger.Logger(out=None)` writes one JSON object per line to a
text stream (standard output by default). Each line holds `timestamp`,
`level` (`INFO`, `WARN`, `ALERT` or `ERROR`), `message` and, when given,
`fields`. Use `info`, `warn`, `alert` and `error`.

## Alerts

`procwatch.alert.Manager` builds an `Event` on each
`emit(process, pid, metric, value, threshold, severity)` and passes it to
every handler added with `register`. A handler is any callable that takes
an `Event`. Supplied handlers:

- `procwatch.logger_handler.logger_handler(log)` returns a handler that
  logs `Severity.CRITICAL` events as `ERROR`, `Severity.WARN` events as
  `WARN`, and any other severity as `ALERT`.
- `procwatch.webhook_handler.WebhookHandler(url, timeout=0)` POSTs the
  event as JSON from its `handle` method. The timeout is in seconds; 0
  means 5. It raises `WebhookError` on a connection failure or a status
  outside the 2xx range.
- `procwatch.email_handler.EmailHandler(EmailConfig(...))` sends a plain
  text message over SMTP from its `handle` method. It uses STARTTLS when
  the server offers it and, if the server asks for authentication, logs in
  with AUTH PLAIN. It refuses to send credentials over an unencrypted
  connection unless the host is local. SMTP and connection errors are
  raised to the caller.

```python
from procwatch.alert import Manager, Severity
from procwatch.logger import Logger
from procwatch.logger_handler import logger_handler

log = Logger()
alerts = Manager()
alerts.register(logger_handler(log))
alerts.emit("nginx", 1234, "cpu", 95.5, 80.0, Severity.CRITICAL)
```

## Monitoring components

Everything below lives in `procwatch.monitor`:

- `sampler.Sampler(proc_root="/proc")`: `collect(pid, name)` reads
  `<proc_root>/<pid>/stat` and returns a `ProcSample` holding cumulative
  CPU ticks (utime + stime) and resident memory in MB. It assumes 4 KiB
  pages and raises `SamplerError` on failure.
  `cpu_percent(prev, curr, ticks_per_second)` turns two samples into
  single-core usage.
- `process.find_pid(name, proc_root="/proc")` returns the first PID whose
  `comm` equals `name`, or raises `ProcessNotFoundError`.
  `process.check_alerts(stats, proc)` compares a `ProcessStats` with a
  `ProcessConfig` and returns `Alert` objects of kind `cpu` or `memory`.
  Zero thresholds are ignored.
- `history.History(window_size=60)` keeps the most recent samples for
  each process name. Its methods are `add`, `latest`, `all`,
  `average_cpu` and `average_memory`.
- `aggregator.Aggregator(history).compute(name)` returns `Stats` (average
  and maximum CPU and memory, sample count, last PID). It raises
  `AggregationError` when there are no samples.
- `baseline.BaselineTracker(window=600)` keeps samples for `window`
  seconds. `compute` returns `BaselineStats` with means and population
  standard deviations, or `None`.
- `anomaly.AnomalyDetector(z_threshold=2.0, window=0)` flags CPU or memory
  values whose z-score against the baseline exceeds the threshold.
  `analyze` returns an `AnomalyResult`, or `None` when there is no
  baseline yet.
- `trend.TrendAnalyzer(threshold=0.5).analyze(process, metric, values)`
  computes a least-squares slope (`linear_slope`) and classifies it as
  `TrendDirection.RISING`, `FALLING` or `STABLE`.
- `throttle.Throttle(cooldown=60)` lets one alert per key through in each
  cooldown period. `ratelimit.RateLimit(max_burst=3, window=60)` allows a
  burst of alerts per process in each window.
- `snapshot.SnapshotStore(capacity=10)` is a bounded store of `Snapshot`
  objects. Its methods are `add`, `latest`, `all` and `len()`.
- `healthcheck.HealthChecker(staleness=30)` tracks liveness and counts a
  restart whenever a process is seen with a new positive PID.

All durations are in seconds.

### Periodic loops

- `reporter.Reporter(aggregator, log, names, interval)` logs
  `process stats` entries from a background thread (`start`, `stop`).
- `baseline_reporter.BaselineReporter(tracker, log, processes, interval=300)`
  logs `baseline_stats` entries. `run` blocks until `stop` is called.
- `trend_reporter.TrendReporter(history, analyzer, log, interval, processes)`
  logs `trend` entries for processes with at least two samples.
- `watcher.Watcher(cfg, sampler, history, throttle, alerts, log, interval, pid=None, ticks_per_second=100)`
  samples one process on each tick. When no PID is given it finds the
  process by name. It works out CPU percent from successive tick counts,
  stores a `Sample` in the history, and emits `Severity.WARN` alerts
  through the manager. Alerts are throttled per `process:kind`.

`TrendReporter.run` and `Watcher.run` take an optional `cancel` object
with an `is_set()` method, such as a `threading.Event`. Each loop also
ends when its `stop` method is called.

```python
import threading

from procwatch.alert import Manager
from procwatch.config import ProcessConfig
from procwatch.logger import Logger
from procwatch.logger_handler import logger_handler
from procwatch.monitor.history import History
from procwatch.monitor.sampler import Sampler
from procwatch.monitor.throttle import Throttle
from procwatch.monitor.watcher import Watcher

log = Logger()
alerts = Manager()
alerts.register(logger_handler(log))

cfg = ProcessConfig(name="nginx", cpu_threshold=80.0, mem_threshold=512)
watcher = Watcher(cfg, Sampler(), History(), Throttle(), alerts, log, interval=5.0)

cancel = threading.Event()
threading.Thread(target=watcher.run, args=(cancel,), daemon=True).start()
# ... later
cancel.set()
```

## What it does not do

- There is no command-line program or daemon. Nothing reads a
  configuration file and starts watchers for you; the loops have to be
  wired together in your own code, as shown above.
- `Collector` only holds a `Config`; it does not collect anything.
- The `log_level` and `log_format` settings are read and given defaults,
  but `Logger` does not use them. It always writes every entry as JSON.
- `pid_file` is read from the configuration, but nothing uses it.
- Sampling works only where a Linux-style `/proc` tree is available.