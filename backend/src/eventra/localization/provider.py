"""Machine translation providers and the fail-safe translator around them.

Providers make the remote call and raise TranslationProviderError on any
failure. MachineTranslator wraps a provider, never lets a failure reach
the caller, and runs every result through the glossary.
"""

import asyncio
from typing import Any, Protocol

import httpx

from eventra.core.config import Settings
from eventra.core.exceptions import (
    ExternalServiceError,
    TimeoutError,
    TranslationProviderError,
)
from eventra.core.http import fetch_json
from eventra.core.logging import get_logger
from eventra.i18n.config import Locale
from eventra.localization.glossary import Glossary
from eventra.localization.models import TranslationRecord

logger = get_logger(__name__)

GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


class TranslationProvider(Protocol):
    """A remote machine translation service."""

    name: str

    async def translate(
        self, text: str, target: Locale, source: Locale | None = None
    ) -> str: ...


class NoopTranslationProvider:
    """Provider used when translation is not configured: returns the source text."""

    name = "none"

    async def translate(
        self, text: str, target: Locale, source: Locale | None = None
    ) -> str:
        return text


class _HTTPTranslationProvider:
    name = "http"

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def _post(self, **kwargs: Any) -> Any:
        try:
            return await fetch_json(
                self.url,
                method="POST",
                timeout_seconds=self.timeout_seconds,
                service_name=f"{self.name} translation",
                transport=self.transport,
                **kwargs,
            )
        except (ExternalServiceError, TimeoutError) as e:
            raise TranslationProviderError(self.name, e.message) from e


class GoogleTranslateProvider(_HTTPTranslationProvider):
    """Google Cloud Translation v2 REST API.

    Request: POST {url}?key=... with {"q", "target", "format", "source"?}
    Response: {"data": {"translations": [{"translatedText": ...}]}}
    """

    name = "google"

    def __init__(
        self,
        api_key: str,
        url: str = GOOGLE_TRANSLATE_URL,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(url, api_key, timeout_seconds, transport)

    async def translate(
        self, text: str, target: Locale, source: Locale | None = None
    ) -> str:
        payload: dict[str, str] = {
            "q": text,
            "target": Locale(target).value,
            "format": "text",
        }
        if source is not None:
            payload["source"] = Locale(source).value

        data = await self._post(params={"key": self.api_key}, json=payload)

        try:
            translated = data["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationProviderError(self.name, "malformed response") from e
        if not isinstance(translated, str) or not translated:
            raise TranslationProviderError(self.name, "no translation returned")
        return translated


class RestTranslateProvider(_HTTPTranslationProvider):
    """Generic JSON translation endpoint.

    Request: POST {url} with {"text", "target", "format"}
    Response: {"translatedText": ...}
    """

    name = "rest"

    async def translate(
        self, text: str, target: Locale, source: Locale | None = None
    ) -> str:
        payload: dict[str, str] = {
            "text": text,
            "target": Locale(target).value,
            "format": "text",
        }
        if source is not None:
            payload["source"] = Locale(source).value
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else None

        data = await self._post(json=payload, headers=headers)

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str) or not translated:
            raise TranslationProviderError(self.name, "malformed response")
        return translated


class MachineTranslator:
    """Translate text with a provider, degrading to the source text on failure.

    Every result except the same-locale no-op goes through the glossary,
    whether the provider succeeded or not.
    """

    def __init__(self, provider: TranslationProvider, glossary: Glossary):
        self.provider = provider
        self.glossary = glossary

    @property
    def enabled(self) -> bool:
        return not isinstance(self.provider, NoopTranslationProvider)

    async def translate(
        self,
        text: str,
        target: Locale | str,
        source: Locale | str | None = None,
    ) -> str:
        """Translate ``text`` into ``target``.

        Returns ``text`` untouched, without calling the provider, when
        ``target`` is the source locale or the text is empty.
        """
        if not text:
            return text
        target_locale = Locale(target)
        source_locale = Locale(source) if source is not None else None
        if source_locale == target_locale:
            return text

        translated = text
        try:
            translated = await self.provider.translate(
                text, target_locale, source_locale
            )
        except TranslationProviderError as e:
            logger.warning(
                "translation_provider_failed",
                provider=e.provider,
                target=target_locale.value,
                reason=e.reason,
            )
        except Exception as e:
            logger.warning(
                "translation_provider_failed",
                provider=self.provider.name,
                target=target_locale.value,
                reason=str(e),
                error_type=type(e).__name__,
            )

        return self.glossary.apply(translated, target_locale)

    async def translate_record(
        self,
        record: TranslationRecord,
        target: Locale | str,
    ) -> TranslationRecord:
        """Translate all text fields of a record into ``target``.

        Fields are independent, so they are translated concurrently.
        """
        target_locale = Locale(target)
        title, description, location = await asyncio.gather(
            self.translate(record.title, target_locale, record.locale),
            self.translate(record.description, target_locale, record.locale),
            self.translate(record.location, target_locale, record.locale),
        )
        return TranslationRecord(
            locale=target_locale,
            title=title,
            description=description,
            location=location,
        )


def build_translation_provider(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TranslationProvider:
    """Create the provider selected by TRANSLATE_PROVIDER.

    Falls back to the no-op provider when credentials are missing.
    """
    if not settings.translation_enabled:
        if settings.TRANSLATE_PROVIDER != "none":
            logger.warning(
                "translation_provider_not_configured",
                provider=settings.TRANSLATE_PROVIDER,
            )
        return NoopTranslationProvider()

    if settings.TRANSLATE_PROVIDER == "google":
        assert settings.TRANSLATE_API_KEY is not None  # for type narrowing
        return GoogleTranslateProvider(
            api_key=settings.TRANSLATE_API_KEY,
            url=settings.TRANSLATE_API_URL or GOOGLE_TRANSLATE_URL,
            timeout_seconds=settings.TRANSLATE_TIMEOUT_SECONDS,
            transport=transport,
        )

    assert settings.TRANSLATE_API_URL is not None
    return RestTranslateProvider(
        url=settings.TRANSLATE_API_URL,
        api_key=settings.TRANSLATE_API_KEY,
        timeout_seconds=settings.TRANSLATE_TIMEOUT_SECONDS,
        transport=transport,
    )
