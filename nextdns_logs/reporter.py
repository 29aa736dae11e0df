from __future__ import annotations

import logging
import sys
from typing import TextIO

from .logging_utils import get_logger, log_json
from .models import RunState
from .utils import format_local


class ProgressReporter:
    """Prints ``<count> <latest timestamp>`` after every downloaded page."""

    def __init__(self, out: TextIO | None = None):
        self.out = out or sys.stdout
        self.logger = get_logger("download")

    def __call__(self, state: RunState) -> None:
        latest = format_local(state.max_timestamp)
        print(f"{state.count} {latest}", file=self.out, flush=True)
        log_json(self.logger, logging.DEBUG, "download_progress", page=state.pages, count=state.count, max_timestamp=state.max_timestamp)
