"""Host platform (Telegram WebApp) context.

The dashboard runs inside a chat-platform mini-app container. Everything the
container provides is optional: the user id comes from the launch parameters,
and the theming hooks are fired client-side on a best-effort basis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping
from urllib.parse import parse_qs

from .config import Settings, is_local_host

logger = logging.getLogger(__name__)

THEME_COLOR = "#0B1120"

_THEME_SNIPPET = """
<script src="https://telegram.org/js/telegram-web-app.js"></script>
<script>
  (function () {{
    var tg = (window.parent.Telegram || window.Telegram || {{}}).WebApp;
    if (!tg) {{ return; }}
    {calls}
  }})();
</script>
"""


def _parse_user_id(init_data: str | None) -> int | None:
    if not init_data:
        return None
    user = parse_qs(init_data).get("user")
    if not user:
        return None
    try:
        payload = json.loads(user[0])
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        logger.warning("Ignoring unreadable user entry in host init data")
        return None


def _first(params: Mapping[str, Any], key: str) -> str | None:
    value = params.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return str(value) if value else None


@dataclass
class HostContext:
    """What the embedding container supplied for this session."""

    user_id: int | None = None
    hostname: str | None = None
    in_platform: bool = False
    calls: tuple[str, ...] = ()

    @classmethod
    def from_request(cls, query_params: Mapping[str, Any], headers: Mapping[str, Any] | None = None) -> "HostContext":
        """Build the context from the page query parameters and request headers.

        The container passes its init data as ``tgWebAppData``; an explicit
        ``chatId`` parameter is honoured when the bot links to the page
        directly.
        """

        headers = headers or {}
        init_data = _first(query_params, "tgWebAppData")
        user_id = _parse_user_id(init_data)
        if user_id is None:
            chat_id = _first(query_params, "chatId")
            if chat_id:
                try:
                    user_id = int(chat_id)
                except ValueError:
                    logger.warning("Ignoring unreadable chatId %r", chat_id)
        return cls(
            user_id=user_id,
            hostname=_first(headers, "Host") or _first(headers, "host"),
            in_platform=init_data is not None,
        )

    def expand(self) -> None:
        self.calls += ("tg.expand();",)

    def set_header_color(self, color: str) -> None:
        self.calls += (f"tg.setHeaderColor({json.dumps(color)});",)

    def set_background_color(self, color: str) -> None:
        self.calls += (f"tg.setBackgroundColor({json.dumps(color)});",)

    def theme_script(self) -> str:
        calls = "\n    ".join(f"try {{ {call} }} catch (e) {{}}" for call in self.calls)
        return _THEME_SNIPPET.format(calls=calls)


def apply_host_theme(host: HostContext, render: Callable[[str], Any], color: str = THEME_COLOR) -> None:
    """Expand the container and paint its chrome; failures never reach the app."""

    if not host.in_platform:
        return
    host.calls = ()
    host.expand()
    host.set_header_color(color)
    host.set_background_color(color)
    try:
        render(host.theme_script())
    except Exception as exc:  # theming is cosmetic
        logger.debug("Host theming failed: %s", exc)


def resolve_user_id(host: HostContext | None, settings: Settings) -> tuple[int, bool]:
    """Return ``(user_id, used_fallback)``.

    Outside the host platform the development placeholder id is used. That is
    only expected on a local development host; anywhere else it is logged as a
    warning because it usually means the page was opened outside the
    container or the container context was lost.
    """

    if host is not None and host.user_id is not None:
        return host.user_id, False

    hostname = host.hostname if host is not None else None
    if not is_local_host(hostname):
        logger.warning(
            "No host platform user on %s; falling back to development chat id %s",
            hostname or "unknown host",
            settings.dev_chat_id,
        )
    return settings.dev_chat_id, True


def same_origin(headers: Mapping[str, Any] | None) -> str:
    """Origin of the current request, or ``""`` when it is unknown."""

    headers = headers or {}
    host = _first(headers, "Host") or _first(headers, "host")
    if not host:
        return ""
    scheme = _first(headers, "X-Forwarded-Proto") or ("http" if is_local_host(host) else "https")
    return f"{scheme}://{host}"
