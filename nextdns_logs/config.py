from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError


def env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def env_int(name: str, default: int) -> int:
    v = env(name)
    if v is None or not v.strip():
        return default
    try:
        return int(v)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {v!r}")


def env_float(name: str, default: float) -> float:
    v = env(name)
    if v is None or not v.strip():
        return default
    try:
        return float(v)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {v!r}")


@dataclass(frozen=True)
class Settings:
    api_key: str
    profile: str
    api_url: str = "https://api.nextdns.io"
    output_path: str = "output.log"
    log_level: str = "INFO"

    user_agent: str = "nextdns-logs/0.1"
    page_limit: int = 1000
    timeout_sec: float = 20.0

    # Stream framing: a line carrying the marker is a data frame, the prefix is the envelope to strip.
    stream_data_prefix: str = "data:"
    stream_data_marker: str = "timestamp"


def load_settings() -> Settings:
    # The lower-case names are what older .env files used.
    api_key = env("NEXTDNS_API_KEY") or env("nextdns_api_key") or ""
    profile = env("NEXTDNS_PROFILE") or env("nextdns_profile") or ""
    if not api_key:
        raise ConfigError("Missing NEXTDNS_API_KEY (or nextdns_api_key).")
    if not profile:
        raise ConfigError("Missing NEXTDNS_PROFILE (or nextdns_profile).")

    page_limit = env_int("NEXTDNS_PAGE_LIMIT", 1000)
    if not 1 <= page_limit <= 1000:
        raise ConfigError(f"NEXTDNS_PAGE_LIMIT must be between 1 and 1000, got {page_limit}")

    return Settings(
        api_key=api_key,
        profile=profile,
        api_url=(env("NEXTDNS_API_URL", "https://api.nextdns.io") or "https://api.nextdns.io").rstrip("/"),
        output_path=env("NEXTDNS_OUTPUT_PATH", "output.log") or "output.log",
        log_level=(env("LOG_LEVEL", "INFO") or "INFO").upper(),
        user_agent=env("NEXTDNS_USER_AGENT", "nextdns-logs/0.1") or "nextdns-logs/0.1",
        page_limit=page_limit,
        timeout_sec=env_float("NEXTDNS_TIMEOUT_SEC", 20.0),
        stream_data_prefix=env("NEXTDNS_STREAM_DATA_PREFIX", "data:") or "",
        stream_data_marker=env("NEXTDNS_STREAM_DATA_MARKER", "timestamp") or "timestamp",
    )
