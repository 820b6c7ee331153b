"""Request locale held in a contextvar.

It selects the catalog for API messages and the Content-Language header.
Sync dependencies (such as the ``lang`` query dependency) run in a worker
thread whose contextvar changes do not flow back, so the locale is also
written into the request scope state that LocaleMiddleware shares here.
"""

from contextvars import ContextVar, Token
from typing import Any

from eventra.i18n.config import DEFAULT_LOCALE

LOCALE_STATE_KEY = "_i18n_locale"

_locale_context: ContextVar[str] = ContextVar("locale", default=DEFAULT_LOCALE.value)
_request_state: ContextVar[dict[str, Any] | None] = ContextVar(
    "request_state", default=None
)


def get_locale() -> str:
    """Return the request locale, preferring the value in request state."""
    state = _request_state.get()
    if state is not None:
        value = state.get(LOCALE_STATE_KEY)
        if isinstance(value, str):
            return value
    return _locale_context.get()


def set_locale(locale: str) -> Token[str]:
    """Make ``locale`` the request locale; returns a token for reset_locale()."""
    code = str(locale)
    state = _request_state.get()
    if state is not None:
        state[LOCALE_STATE_KEY] = code
    return _locale_context.set(code)


def reset_locale(token: Token[str]) -> None:
    _locale_context.reset(token)


def set_request_state(state: dict[str, Any] | None) -> Token[dict[str, Any] | None]:
    """Share the request scope state with code running in worker threads."""
    return _request_state.set(state)
