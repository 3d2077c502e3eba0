"""Base URL resolution, host context and user id fallback."""

from __future__ import annotations

import json
import logging
from urllib.parse import urlencode

import pytest

from finstats import config
from finstats.config import Settings, resolve_base_url
from finstats.host import HostContext, apply_host_theme, resolve_user_id, same_origin


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_url=None,
        dev_chat_id=8158002704,
        timezone="Asia/Tashkent",
        request_timeout=None,
        log_level="INFO",
    )


def _init_data(user_id: int) -> str:
    return urlencode({"user": json.dumps({"id": user_id, "first_name": "Ali"}), "auth_date": "1700000000"})


@pytest.mark.parametrize(
    ("configured", "hostname", "expected"),
    [
        ("https://api.example.uz/", "app.example.uz", "https://api.example.uz"),
        (None, "localhost", "http://localhost:3000"),
        (None, "127.0.0.1:8501", "http://localhost:3000"),
        (None, "app.example.uz", ""),
        (None, None, ""),
    ],
)
def test_resolve_base_url(configured, hostname, expected) -> None:
    assert resolve_base_url(configured, hostname) == expected


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("API_URL", "https://api.example.uz")
    monkeypatch.setenv("FINSTATS_DEV_CHAT_ID", "12345")
    monkeypatch.setenv("FINSTATS_REQUEST_TIMEOUT", "2.5")
    monkeypatch.delenv("FINSTATS_API_URL", raising=False)
    monkeypatch.delenv("FINSTATS_TIMEZONE", raising=False)
    monkeypatch.setattr(config, "_secret", lambda name: None)

    loaded = Settings.from_env()

    assert loaded.api_url == "https://api.example.uz"
    assert loaded.dev_chat_id == 12345
    assert loaded.request_timeout == 2.5
    assert loaded.timezone == config.DEFAULT_TIMEZONE


def test_host_context_from_init_data() -> None:
    host = HostContext.from_request({"tgWebAppData": _init_data(987)}, {"Host": "app.example.uz"})
    assert host.user_id == 987
    assert host.in_platform is True
    assert host.hostname == "app.example.uz"


def test_host_context_from_chat_id_param() -> None:
    host = HostContext.from_request({"chatId": "555"})
    assert host.user_id == 555
    assert host.in_platform is False


def test_host_context_absent_does_not_crash() -> None:
    host = HostContext.from_request({})
    assert host.user_id is None
    assert host.hostname is None


def test_host_context_unreadable_user(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="finstats.host"):
        host = HostContext.from_request({"tgWebAppData": "user=not-json"})
    assert host.user_id is None
    assert "unreadable" in caplog.text


def test_resolve_user_id_prefers_platform(settings: Settings) -> None:
    host = HostContext(user_id=42, hostname="app.example.uz")
    assert resolve_user_id(host, settings) == (42, False)


def test_resolve_user_id_fallback_on_local_host_is_quiet(settings: Settings, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="finstats.host"):
        result = resolve_user_id(HostContext(hostname="localhost:8501"), settings)
    assert result == (8158002704, True)
    assert caplog.records == []


def test_resolve_user_id_fallback_elsewhere_warns(settings: Settings, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="finstats.host"):
        result = resolve_user_id(HostContext(hostname="app.example.uz"), settings)
    assert result == (8158002704, True)
    assert "development chat id" in caplog.text


def test_apply_host_theme_renders_calls() -> None:
    rendered: list[str] = []
    host = HostContext(user_id=1, in_platform=True)
    apply_host_theme(host, rendered.append)

    assert len(rendered) == 1
    assert "tg.expand();" in rendered[0]
    assert 'tg.setHeaderColor("#0B1120");' in rendered[0]
    assert 'tg.setBackgroundColor("#0B1120");' in rendered[0]


def test_apply_host_theme_failure_is_ignored() -> None:
    def broken(_html: str) -> None:
        raise RuntimeError("no components")

    apply_host_theme(HostContext(in_platform=True), broken)


def test_apply_host_theme_outside_platform_is_noop() -> None:
    rendered: list[str] = []
    apply_host_theme(HostContext(), rendered.append)
    assert rendered == []


def test_same_origin() -> None:
    assert same_origin({"Host": "app.example.uz"}) == "https://app.example.uz"
    assert same_origin({"Host": "localhost:8501"}) == "http://localhost:8501"
    assert same_origin({"Host": "app.example.uz", "X-Forwarded-Proto": "http"}) == "http://app.example.uz"
    assert same_origin({}) == ""


@pytest.mark.parametrize("raw", ["--5", "²", "12a"])
def test_host_context_unreadable_chat_id(raw: str, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="finstats.host"):
        host = HostContext.from_request({"chatId": raw})
    assert host.user_id is None
    assert "unreadable chatId" in caplog.text
