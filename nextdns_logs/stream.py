from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

from rich.console import Console

from .api import iter_stream_lines
from .errors import DecodeError
from .logging_utils import get_logger, log_json
from .models import StreamStats
from .sink import RecordSink


@dataclass(frozen=True)
class StreamFraming:
    """How data frames look on the wire, e.g. ``data: {"timestamp": ...}``."""

    prefix: str = "data:"
    marker: str = "timestamp"

    def extract(self, line: str) -> Optional[str]:
        """Return the JSON payload of a data frame, or None for keep-alive/control lines."""
        if not self.marker or self.marker not in line:
            return None
        payload = line.strip()
        if self.prefix and payload.startswith(self.prefix):
            payload = payload[len(self.prefix):].strip()
        return payload or None


def keyword_matches(keyword: str | None, payload: str) -> bool:
    return not keyword or keyword in payload


class StreamSource(Protocol):
    def open_stream(self, keyword: str | None = None) -> Any: ...


class StreamConsumer:
    def __init__(
        self,
        source: StreamSource,
        sink: RecordSink,
        console: Console | None = None,
        framing: StreamFraming | None = None,
        keyword: str | None = None,
        cancel: threading.Event | None = None,
    ):
        self.source = source
        self.sink = sink
        self.console = console or Console()
        self.framing = framing or StreamFraming()
        self.keyword = keyword or None
        self.cancel = cancel or threading.Event()
        self.stats = StreamStats()
        self.logger = get_logger("stream")

    def run(self) -> StreamStats:
        """Tail the stream until it closes, a read fails, or ``cancel`` is set."""
        resp = self.source.open_stream(self.keyword)
        log_json(self.logger, logging.INFO, "stream_opened", keyword=self.keyword)
        try:
            self.consume(iter_stream_lines(resp))
        finally:
            resp.close()
        log_json(self.logger, logging.INFO, "stream_closed", cancelled=self.cancel.is_set(), **self.stats.__dict__)
        return self.stats

    def consume(self, lines: Iterable[str]) -> StreamStats:
        for line in lines:
            if self.cancel.is_set():
                break
            self.stats.lines += 1
            self.handle_line(line)
        return self.stats

    def handle_line(self, line: str) -> None:
        payload = self.framing.extract(line)
        if payload is None:
            return

        try:
            obj = json.loads(payload)
        except ValueError as e:
            raise DecodeError(f"stream frame is not JSON: {payload[:200]!r}") from e
        self.stats.frames += 1

        if keyword_matches(self.keyword, payload):
            self.sink.write_raw(payload)
            self.stats.written += 1

        self.console.print_json(data=obj)
        self.stats.echoed += 1
