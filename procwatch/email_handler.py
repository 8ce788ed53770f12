"""Alert handler that sends events by e-mail over SMTP."""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone

from procwatch.alert import Event

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


@dataclass
class EmailConfig:
    """SMTP settings for the e-mail handler."""

    smtp_host: str = ""
    smtp_port: int = 0
    username: str = ""
    password: str = ""
    sender: str = ""
    to: list[str] = field(default_factory=list)


def _rfc3339(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    text = ts.isoformat(timespec="seconds")
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class EmailHandler:
    """Sends a notification e-mail for each alert event."""

    def __init__(self, config: EmailConfig) -> None:
        self.config = config

    def _message(self, event: Event) -> bytes:
        cfg = self.config
        subject = f"[procwatch] Alert: {event.process}"
        body = (
            f"Process : {event.process}\n"
            f"Metric  : {event.metric}\n"
            f"Value   : {event.value:.2f}\n"
            f"Threshold: {event.threshold:.2f}\n"
            f"Time    : {_rfc3339(event.timestamp)}\n"
        )
        text = (
            f"To: {','.join(cfg.to)}\r\n"
            f"From: {cfg.sender}\r\n"
            f"Subject: {subject}\r\n"
            "\r\n"
            f"{body}"
        )
        return text.encode("utf-8")

    def _authenticate(self, smtp: smtplib.SMTP, encrypted: bool) -> None:
        cfg = self.config
        if not encrypted and cfg.smtp_host not in _LOCAL_HOSTS:
            raise smtplib.SMTPException("unencrypted connection")
        smtp.user = cfg.username
        smtp.password = cfg.password
        smtp.auth("PLAIN", smtp.auth_plain)

    def handle(self, event: Event) -> None:
        """Send the e-mail; SMTP and connection errors propagate."""
        cfg = self.config
        message = self._message(event)
        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, local_hostname="localhost") as smtp:
            smtp.ehlo()
            encrypted = False
            if smtp.has_extn("starttls"):
                smtp.starttls(context=ssl.create_default_context())
                smtp.ehlo()
                encrypted = True
            if smtp.has_extn("auth"):
                self._authenticate(smtp, encrypted)
            smtp.sendmail(cfg.sender, cfg.to, message)