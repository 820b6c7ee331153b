"""Accept-Language negotiation as pure ASGI middleware.

The request locale starts as the best supported Accept-Language entry, or
DEFAULT_LOCALE. Routes with a ``lang`` query parameter replace it through
set_locale(), and Content-Language is written from the final value when the
response starts.

BaseHTTPMiddleware is avoided because it breaks contextvar propagation:
https://github.com/encode/starlette/discussions/1729
"""

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from eventra.i18n.config import DEFAULT_LOCALE, SUPPORTED_LOCALE_CODES
from eventra.i18n.context import (
    LOCALE_STATE_KEY,
    reset_locale,
    set_locale,
    set_request_state,
)

# Sorani Kurdish is tagged "ckb" by most browsers
LANGUAGE_ALIASES = {"ckb": "ku"}


def _weighted_tags(header: str) -> list[tuple[str, float]]:
    tags: list[tuple[str, float]] = []
    for entry in header.split(","):
        tag, _, params = entry.strip().partition(";")
        if not tag:
            continue
        weight = 1.0
        name, _, value = params.strip().partition("=")
        if name.strip() == "q":
            try:
                weight = float(value)
            except ValueError:
                pass
        tags.append((tag.strip(), weight))
    # Stable sort keeps header order among equal weights
    return sorted(tags, key=lambda item: item[1], reverse=True)


def parse_accept_language(header: str | None) -> str | None:
    """Return the supported locale code the client prefers most.

    Matches on the base language, so "ar-IQ" selects "ar" and "ckb-IQ"
    selects "ku". Returns None when no entry is supported.
    """
    if not header:
        return None

    for tag, weight in _weighted_tags(header):
        if weight <= 0:
            continue
        base = tag.lower().replace("_", "-").split("-")[0]
        base = LANGUAGE_ALIASES.get(base, base)
        if base in SUPPORTED_LOCALE_CODES:
            return base
    return None


class LocaleMiddleware:
    """Set the request locale and echo it in Content-Language."""

    def __init__(
        self,
        app: ASGIApp,
        default_locale: str = DEFAULT_LOCALE.value,
    ) -> None:
        self.app = app
        self.default_locale = default_locale

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        header = Headers(scope=scope).get("accept-language")
        locale = parse_accept_language(header) or self.default_locale

        state = scope.setdefault("state", {})
        state[LOCALE_STATE_KEY] = locale
        set_request_state(state)
        locale_token = set_locale(locale)

        async def send_with_content_language(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Content-Language"] = state.get(LOCALE_STATE_KEY, locale)
            await send(message)

        try:
            await self.app(scope, receive, send_with_content_language)
        finally:
            reset_locale(locale_token)
            set_request_state(None)
