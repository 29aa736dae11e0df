from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

from .errors import ApiError


@dataclass
class HttpConfig:
    user_agent: str
    timeout: float | None = 20.0


class HttpClient:
    """Thin wrapper over a requests session. One attempt per call, no retries."""

    def __init__(self, cfg: HttpConfig, session: requests.Session | None = None):
        self.cfg = cfg
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": cfg.user_agent})

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        timeout = kwargs.pop("timeout", self.cfg.timeout)
        headers = kwargs.pop("headers", {}) or {}

        merged_headers = dict(self.session.headers)
        merged_headers.update(headers)

        try:
            resp = self.session.request(method, url, headers=merged_headers, timeout=timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{method} {url} failed: {e}") from e

        if not resp.ok:
            status = resp.status_code
            body = resp.text[:200].strip()
            resp.close()
            raise ApiError(f"{method} {url} returned HTTP {status}{': ' + body if body else ''}", status_code=status)
        return resp

    def close(self) -> None:
        self.session.close()

