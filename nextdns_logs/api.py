from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

import requests

from .config import Settings
from .errors import ApiError, DecodeError
from .http_client import HttpClient, HttpConfig
from .models import LogsPage, parse_logs_page
from .time_expr import TimeExpression

API_KEY_HEADER = "X-Api-Key"


@dataclass(frozen=True)
class RequestSpec:
    method: str
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: float | None = None
    stream: bool = False


def _logs_url(settings: Settings, suffix: str = "") -> str:
    return f"{settings.api_url}/profiles/{settings.profile}/logs{suffix}"


def build_download_request(
    settings: Settings,
    start: TimeExpression,
    end: TimeExpression,
    cursor: Optional[str] = None,
) -> RequestSpec:
    params = {
        "from": str(start),
        "to": str(end),
        "limit": str(settings.page_limit),
        "raw": "1",
    }
    # None is the first request, "" is the end marker; neither goes on the wire.
    if cursor:
        params["cursor"] = cursor
    return RequestSpec(
        method="GET",
        url=_logs_url(settings),
        params=params,
        headers={API_KEY_HEADER: settings.api_key},
        timeout=settings.timeout_sec,
    )


def build_stream_request(settings: Settings, keyword: str | None = None) -> RequestSpec:
    params = {"raw": "1"}
    if keyword:
        params["search"] = keyword
    return RequestSpec(
        method="GET",
        url=_logs_url(settings, "/stream"),
        params=params,
        headers={API_KEY_HEADER: settings.api_key},
        timeout=None,
        stream=True,
    )


class NextDnsApi:
    def __init__(self, settings: Settings, client: HttpClient | None = None):
        self.settings = settings
        self.client = client or HttpClient(HttpConfig(user_agent=settings.user_agent, timeout=settings.timeout_sec))

    def send(self, spec: RequestSpec) -> requests.Response:
        return self.client.request(
            spec.method,
            spec.url,
            params=spec.params,
            headers=spec.headers,
            timeout=spec.timeout,
            stream=spec.stream,
        )

    def fetch_page(self, start: TimeExpression, end: TimeExpression, cursor: Optional[str] = None) -> LogsPage:
        resp = self.send(build_download_request(self.settings, start, end, cursor))
        try:
            body: Any = resp.json()
        except ValueError as e:
            raise DecodeError(f"logs response is not JSON: {e}") from e
        return parse_logs_page(body)

    def open_stream(self, keyword: str | None = None) -> requests.Response:
        return self.send(build_stream_request(self.settings, keyword))

    def close(self) -> None:
        self.client.close()


def iter_stream_lines(resp: requests.Response) -> Iterator[str]:
    """Yield lines as they arrive, decoded as UTF-8; read failures become ApiError.

    The stream is served as text/event-stream without a charset, so the
    encoding requests guesses from the headers (ISO-8859-1) is not used.
    """
    try:
        for line in resp.iter_lines(chunk_size=None, decode_unicode=False):
            if isinstance(line, bytes):
                line = line.decode("utf-8", errors="replace")
            yield line
    except requests.RequestException as e:
        raise ApiError(f"stream read failed: {e}") from e
