"""Alert handler that posts events as JSON to an HTTP endpoint."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from datetime import datetime, timezone

from procwatch.alert import Event

_DEFAULT_TIMEOUT = 5.0


class WebhookError(Exception):
    """Raised when an event cannot be delivered to the webhook."""


def _utc_rfc3339(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class WebhookHandler:
    """POSTs alert events to a URL; ``timeout`` is in seconds, 0 means 5."""

    def __init__(self, url: str, timeout: float = 0) -> None:
        self.url = url
        self.timeout = timeout if timeout > 0 else _DEFAULT_TIMEOUT

    def handle(self, event: Event) -> None:
        """Send the event; raise WebhookError on failure or a non-2xx reply."""
        payload = {
            "timestamp": _utc_rfc3339(event.timestamp),
            "process": event.process,
            "pid": event.pid,
            "metric": event.metric,
            "value": event.value,
            "threshold": event.threshold,
            "message": event.message,
        }
        try:
            body = json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise WebhookError(f"webhook: marshal payload: {exc}") from exc

        request = urllib.request.Request(
            self.url,
            data=body,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
        except urllib.error.HTTPError as exc:
            status = exc.code
            exc.close()
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise WebhookError(f"webhook: post to {self.url}: {exc}") from exc

        if not 200 <= status < 300:
            raise WebhookError(f"webhook: unexpected status {status} from {self.url}")