from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .errors import DecodeError
from .utils import parse_iso


@dataclass(frozen=True)
class Device:
    id: str | None = None
    name: str | None = None
    model: str | None = None
    local_ip: str | None = None


@dataclass(frozen=True)
class Reason:
    id: str
    name: str


@dataclass(frozen=True)
class LogRecord:
    """One DNS query as returned by the logs API with ``raw=1``.

    ``raw`` is the decoded API object; it is what gets written out, so unknown
    or future fields pass through untouched.
    """

    timestamp: datetime
    domain: str
    root: str | None = None
    tracker: str | None = None
    type: str | None = None
    dnssec: bool | None = None
    encrypted: bool = False
    protocol: str | None = None
    client_ip: str | None = None
    client: str | None = None
    device: Device | None = None
    status: str | None = None
    reasons: Tuple[Reason, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LogRecord":
        if not isinstance(d, dict):
            raise DecodeError(f"log record must be an object, got {type(d).__name__}")
        try:
            ts = parse_iso(d.get("timestamp"))
        except (TypeError, ValueError) as e:
            raise DecodeError(f"bad timestamp {d.get('timestamp')!r}: {e}")
        if ts is None:
            raise DecodeError("log record without timestamp")

        dev = d.get("device")
        device = None
        if isinstance(dev, dict):
            device = Device(id=dev.get("id"), name=dev.get("name"), model=dev.get("model"), local_ip=dev.get("localIp"))

        reasons = tuple(
            Reason(id=str(r.get("id", "")), name=str(r.get("name", "")))
            for r in (d.get("reasons") or [])
            if isinstance(r, dict)
        )

        return cls(
            timestamp=ts,
            domain=str(d.get("domain") or ""),
            root=d.get("root"),
            tracker=d.get("tracker"),
            type=d.get("type"),
            dnssec=d.get("dnssec"),
            encrypted=bool(d.get("encrypted", False)),
            protocol=d.get("protocol"),
            client_ip=d.get("clientIp"),
            client=d.get("client"),
            device=device,
            status=d.get("status"),
            reasons=reasons,
            raw=dict(d),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


@dataclass(frozen=True)
class LogsPage:
    records: Tuple[LogRecord, ...]
    cursor: str

    @property
    def is_last(self) -> bool:
        return self.cursor == ""


def parse_logs_page(body: Any) -> LogsPage:
    """Decode ``{"data": [...], "meta": {"pagination": {"cursor": ...}}}``.

    A missing or null cursor means there are no more pages and comes back as "".
    """
    if not isinstance(body, dict):
        raise DecodeError(f"logs response must be an object, got {type(body).__name__}")
    data = body.get("data")
    if data is None:
        data = []
    if not isinstance(data, list):
        raise DecodeError("logs response 'data' must be a list")

    meta = body.get("meta") or {}
    if not isinstance(meta, dict):
        raise DecodeError("logs response 'meta' must be an object")
    pagination = meta.get("pagination") or {}
    if not isinstance(pagination, dict):
        raise DecodeError("logs response 'meta.pagination' must be an object")

    cursor = pagination.get("cursor")
    if cursor is None:
        cursor = ""
    if not isinstance(cursor, str):
        raise DecodeError(f"pagination cursor must be a string, got {type(cursor).__name__}")

    return LogsPage(records=tuple(LogRecord.from_dict(x) for x in data), cursor=cursor)


@dataclass
class RunState:
    """Download progress; ``cursor`` is None until the first page has been read."""

    cursor: Optional[str] = None
    count: int = 0
    max_timestamp: datetime | None = None
    pages: int = 0

    def observe(self, record: LogRecord) -> None:
        if self.max_timestamp is None or record.timestamp > self.max_timestamp:
            self.max_timestamp = record.timestamp
        self.count += 1


@dataclass
class StreamStats:
    lines: int = 0
    frames: int = 0
    written: int = 0
    echoed: int = 0
