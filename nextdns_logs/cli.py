from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading

from dotenv import load_dotenv
from rich.console import Console

from .api import NextDnsApi
from .config import Settings, load_settings
from .errors import InvalidTimeExpression, NextDnsLogsError
from .logging_utils import configure_logging, get_logger, log_json
from .paginator import DownloadPaginator
from .reporter import ProgressReporter
from .sink import CommaDelimitedFileSink
from .stream import StreamConsumer, StreamFraming
from .time_expr import TimeExpression, TimeRange, parse_time_expression

EXAMPLES = "Example: nextdns-logs download -1h now, nextdns-logs download 2022-09-01 -1h, nextdns-logs stream [keyword]"


class _Parser(argparse.ArgumentParser):
    """Usage errors go to stdout with exit status 1."""

    def error(self, message: str):
        self.print_usage(sys.stdout)
        print(f"Error: {message}")
        print(EXAMPLES)
        sys.exit(1)


def _time_arg(value: str) -> TimeExpression:
    try:
        return parse_time_expression(value)
    except InvalidTimeExpression as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="nextdns-logs", description="Download or tail NextDNS query logs", epilog=EXAMPLES)
    sub = parser.add_subparsers(dest="cmd", required=True, parser_class=_Parser)

    dl = sub.add_parser("download", help="Download logs between two points in time")
    dl.add_argument("start", type=_time_arg, help="-1h, -3d, now or 2022-09-01")
    dl.add_argument("end", type=_time_arg, help="-1h, -3d, now or 2022-09-01")
    dl.add_argument("--output", default=None, help="Output file (default: NEXTDNS_OUTPUT_PATH or output.log)")

    st = sub.add_parser("stream", help="Tail the live log stream")
    st.add_argument("keyword", nargs="?", default=None, help="Only write lines containing this keyword")
    st.add_argument("--output", default=None, help="Output file (default: NEXTDNS_OUTPUT_PATH or output.log)")
    st.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")

    return parser


def cmd_download(settings: Settings, time_range: TimeRange, output: str) -> int:
    print(f"download logs - start: {time_range.start} end: {time_range.end}\n")

    api = NextDnsApi(settings)
    try:
        with CommaDelimitedFileSink(output) as sink:
            paginator = DownloadPaginator(api, sink, ProgressReporter())
            state = paginator.run(time_range.start, time_range.end)
    finally:
        api.close()

    print(f"\nDone with {state.count} records")
    return 0


def cmd_stream(settings: Settings, keyword: str | None, output: str, duration: float | None = None) -> int:
    print("streaming logs...")
    logger = get_logger("stream")

    cancel = threading.Event()
    previous_sigterm = signal.signal(signal.SIGTERM, lambda signum, frame: cancel.set())
    timer = None
    if duration:
        timer = threading.Timer(duration, cancel.set)
        timer.daemon = True
        timer.start()

    api = NextDnsApi(settings)
    try:
        with CommaDelimitedFileSink(output) as sink:
            consumer = StreamConsumer(
                api,
                sink,
                console=Console(),
                framing=StreamFraming(prefix=settings.stream_data_prefix, marker=settings.stream_data_marker),
                keyword=keyword,
                cancel=cancel,
            )
            try:
                consumer.run()
            except KeyboardInterrupt:
                cancel.set()
                log_json(logger, logging.INFO, "stream_interrupted", **consumer.stats.__dict__)
    finally:
        if timer is not None:
            timer.cancel()
        if previous_sigterm is not None:
            signal.signal(signal.SIGTERM, previous_sigterm)
        api.close()
    return 0


def main(argv=None) -> int:
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except NextDnsLogsError as e:
        print(f"Error: {e}")
        return 1

    configure_logging(settings.log_level)
    logger = get_logger()
    output = args.output or settings.output_path

    try:
        if args.cmd == "download":
            return cmd_download(settings, TimeRange(args.start, args.end), output)
        if args.cmd == "stream":
            return cmd_stream(settings, args.keyword, output, duration=args.duration)
    except NextDnsLogsError as e:
        log_json(logger, logging.ERROR, "run_failed", cmd=args.cmd, error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}")
        return 1

    return 1
