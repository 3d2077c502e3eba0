"""Runtime configuration for the stats dashboard.

Values come from Streamlit secrets first, then the environment:

- ``API_URL`` / ``FINSTATS_API_URL``: API base URL.
- ``FINSTATS_DEV_CHAT_ID``: placeholder chat id used outside the host platform.
- ``FINSTATS_TIMEZONE``: timezone transaction dates are displayed in.
- ``FINSTATS_REQUEST_TIMEOUT``: seconds; unset leaves the transport default.
- ``FINSTATS_LOG_LEVEL``: level for the ``finstats`` logger.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import streamlit as st

LOCAL_HOSTNAMES = frozenset({"localhost", "127.0.0.1"})
LOCAL_API_URL = "http://localhost:3000"
DEFAULT_DEV_CHAT_ID = 8158002704
DEFAULT_TIMEZONE = "Asia/Tashkent"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _secret(name: str) -> str | None:
    try:
        value = st.secrets.get(name)
    except Exception:  # no secrets.toml outside a configured Streamlit app
        return None
    return str(value) if value else None


def _lookup(*names: str) -> str | None:
    for name in names:
        value = _secret(name) or os.getenv(name)
        if value:
            return value
    return None


def is_local_host(hostname: str | None) -> bool:
    if not hostname:
        return False
    return hostname.split(":", 1)[0].strip("[]").lower() in LOCAL_HOSTNAMES


def resolve_base_url(configured: str | None, hostname: str | None) -> str:
    """Pick the API base URL.

    An explicitly configured URL wins; local development hosts talk to the
    local API server; anything else uses the origin the app was served from,
    represented by an empty base.
    """

    if configured:
        return configured.rstrip("/")
    if is_local_host(hostname):
        return LOCAL_API_URL
    return ""


@dataclass(frozen=True)
class Settings:
    api_url: str | None
    dev_chat_id: int
    timezone: str
    request_timeout: float | None
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = _lookup("FINSTATS_REQUEST_TIMEOUT")
        return cls(
            api_url=_lookup("FINSTATS_API_URL", "API_URL"),
            dev_chat_id=int(_lookup("FINSTATS_DEV_CHAT_ID") or DEFAULT_DEV_CHAT_ID),
            timezone=_lookup("FINSTATS_TIMEZONE") or DEFAULT_TIMEZONE,
            request_timeout=float(timeout) if timeout else None,
            log_level=(_lookup("FINSTATS_LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process; read once and never revisited."""

    return Settings.from_env()


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger once per process."""

    package_logger = logging.getLogger("finstats")
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    package_logger.setLevel(level or get_settings().log_level)
    return package_logger
