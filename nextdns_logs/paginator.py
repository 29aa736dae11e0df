from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .logging_utils import get_logger, log_json
from .models import LogsPage, RunState
from .sink import RecordSink
from .time_expr import TimeExpression


class PageSource(Protocol):
    def fetch_page(self, start: TimeExpression, end: TimeExpression, cursor: Optional[str] = None) -> LogsPage: ...


class DownloadPaginator:
    """Walks the logs endpoint page by page until the API hands back an empty cursor.

    Pages are written in the order the API returns them. Any error raised by the
    source or the sink ends the run; whatever was already written stays on disk.
    """

    def __init__(self, source: PageSource, sink: RecordSink, reporter: Callable[[RunState], None] | None = None):
        self.source = source
        self.sink = sink
        self.reporter = reporter
        self.logger = get_logger("download")

    def run(self, start: TimeExpression, end: TimeExpression) -> RunState:
        state = RunState()
        log_json(self.logger, logging.INFO, "download_started", start=str(start), end=str(end))

        while True:
            page = self.source.fetch_page(start, end, state.cursor)
            state.pages += 1

            for record in page.records:
                self.sink.write(record)
                state.observe(record)

            if self.reporter is not None:
                self.reporter(state)

            log_json(
                self.logger,
                logging.DEBUG,
                "page_fetched",
                page=state.pages,
                records=len(page.records),
                has_more=not page.is_last,
            )

            # An empty page with a cursor is still an intermediate page.
            if page.is_last:
                state.cursor = ""
                break
            state.cursor = page.cursor

        log_json(
            self.logger,
            logging.INFO,
            "download_complete",
            pages=state.pages,
            count=state.count,
            max_timestamp=state.max_timestamp,
        )
        return state
