"""
L4 Execution: log sinks for subprocess output and lifecycle events.

Managers only know the ``LogSink`` protocol. They call ``write`` once per
output chunk and once per lifecycle event; formatting and persistence
are the sink's business.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, TextIO, runtime_checkable

from devbootstrap.core.models.package import LogEvent, Severity

logger = logging.getLogger(__name__)

CHANNEL_LOGGER_PREFIX = "devbootstrap.channel"


@runtime_checkable
class LogSink(Protocol):
    def write(
        self,
        channel: str,
        text: str,
        significant: bool,
        severity: Severity = "info",
    ) -> None: ...


class LoggingLogSink:
    """Forward events to ``logging``, one logger per channel.

    Errors and warnings always surface; plain output chunks go to DEBUG
    unless flagged significant.
    """

    def write(
        self,
        channel: str,
        text: str,
        significant: bool,
        severity: Severity = "info",
    ) -> None:
        log = logging.getLogger(f"{CHANNEL_LOGGER_PREFIX}.{channel}")
        message = text.rstrip()
        if not message:
            return
        if severity == "error":
            log.error(message)
        elif severity == "warn":
            log.warning(message)
        elif significant and severity == "info":
            log.info(message)
        else:
            log.debug(message)


class FileLogSink:
    """Append events as JSON lines to ``<log_dir>/<channel>.log``.

    Optionally forwards every event to another sink afterwards. One
    line-buffered handle stays open per channel until ``close()``.
    """

    def __init__(self, log_dir: str | Path, forward_to: LogSink | None = None):
        self.log_dir = Path(log_dir)
        self._forward_to = forward_to
        self._handles: dict[str, TextIO] = {}

    def __enter__(self) -> FileLogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        handles, self._handles = self._handles, {}
        for fh in handles.values():
            fh.close()

    def _handle(self, channel: str) -> TextIO:
        fh = self._handles.get(channel)
        if fh is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            fh = self.path_for(channel).open("a", encoding="utf-8", buffering=1)
            self._handles[channel] = fh
        return fh

    def path_for(self, channel: str) -> Path:
        return self.log_dir / f"{channel}.log"

    def write(
        self,
        channel: str,
        text: str,
        significant: bool,
        severity: Severity = "info",
    ) -> None:
        event = LogEvent(channel=channel, text=text, significant=significant, severity=severity)
        try:
            self._handle(channel).write(event.model_dump_json() + "\n")
        except OSError as e:
            # Losing a log line must not abort an install.
            logger.warning("Cannot write %s log: %s", channel, e)
        if self._forward_to is not None:
            self._forward_to.write(channel, text, significant, severity)


class RecordingLogSink:
    """Keep events in memory, in arrival order."""

    def __init__(self) -> None:
        self.events: list[LogEvent] = []

    def write(
        self,
        channel: str,
        text: str,
        significant: bool,
        severity: Severity = "info",
    ) -> None:
        self.events.append(
            LogEvent(channel=channel, text=text, significant=significant, severity=severity)
        )

    def texts(self, channel: str | None = None) -> list[str]:
        return [e.text for e in self.events if channel is None or e.channel == channel]

    def clear(self) -> None:
        self.events.clear()
