"""Application errors.

Every error the API can return derives from AppException. Each carries a
machine-readable ``error_code``, an HTTP status, an English ``message`` and
a catalog key (``message_key`` + ``params``) used to translate the message
into the request locale. main.app_exception_handler renders them.

Localization failures (provider errors, failed backfill writes) are also
AppExceptions, but the localization layer recovers from them; they never
reach a client as a 500.
"""

from typing import Any


class AppException(Exception):
    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.message_key = message_key
        self.params = params or {}

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.message_key:
            body["message_key"] = self.message_key
        return body


class ResourceNotFoundError(AppException):
    """A looked-up resource does not exist (404).

    The error code is derived from the resource name, e.g. EVENT_NOT_FOUND.
    """

    def __init__(self, resource: str, identifier: str | None = None):
        details: dict[str, Any] = {"resource": resource}
        params: dict[str, Any] = {"resource": resource}
        if identifier:
            details["id"] = params["id"] = identifier
        super().__init__(
            f"{resource} not found" + (f": {identifier}" if identifier else ""),
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            details,
            message_key="error_not_found_with_id" if identifier else "error_not_found",
            params=params,
        )


class RateLimitError(AppException):
    """Too many requests from one client (429)."""

    def __init__(self, limit: str | None = None, retry_after: int | None = None):
        details: dict[str, Any] = {}
        if limit:
            details["limit"] = limit
        if retry_after:
            details["retry_after"] = retry_after
        super().__init__(
            f"Rate limit exceeded: {limit}" if limit else "Rate limit exceeded",
            "RATE_LIMIT_EXCEEDED",
            429,
            details,
            message_key="error_rate_limit_with_retry" if retry_after else "error_rate_limit",
            params={"seconds": retry_after} if retry_after else None,
        )


class ExternalServiceError(AppException):
    """An upstream HTTP service (translator, geocoder) failed (503)."""

    def __init__(self, service: str, message: str | None = None):
        params: dict[str, Any] = {"service": service}
        if message:
            params["message"] = message
        super().__init__(
            f"{service}: {message}" if message else f"{service} is unavailable",
            "EXTERNAL_SERVICE_ERROR",
            503,
            {"service": service},
            message_key=(
                "error_service_unavailable_with_message"
                if message
                else "error_service_unavailable"
            ),
            params=params,
        )


class TimeoutError(AppException):
    """An upstream call did not finish in time (504)."""

    def __init__(self, operation: str, timeout_seconds: float | None = None):
        details: dict[str, Any] = {"operation": operation}
        params: dict[str, Any] = {"operation": operation}
        message = f"{operation} timed out"
        if timeout_seconds:
            message += f" after {timeout_seconds}s"
            details["timeout_seconds"] = params["seconds"] = timeout_seconds
        super().__init__(
            message,
            "TIMEOUT",
            504,
            details,
            message_key="error_timeout_with_seconds" if timeout_seconds else "error_timeout",
            params=params,
        )


class ConfigurationError(AppException):
    """Invalid configuration, detected when it is loaded."""

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIGURATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            error_code,
            500,
            details,
            message_key="error_configuration_with_message",
            params={"message": message},
        )


class GlossaryConfigurationError(ConfigurationError):
    """A glossary is unusable: an unsupported locale key, or (with ``term``) a
    target term that the glossary would itself rewrite.
    """

    def __init__(self, locale: str, term: str | None = None):
        super().__init__(
            f"Glossary target term '{term}' for locale '{locale}' is also a source term"
            if term
            else f"Glossary locale '{locale}' is not supported",
            "GLOSSARY_CONFIGURATION_ERROR",
            {"locale": locale, "term": term},
        )
        self.locale = locale
        self.term = term


class TranslationProviderError(ExternalServiceError):
    """A machine translation call failed (network, status, malformed body).

    Raised by providers and absorbed by MachineTranslator.
    """

    def __init__(self, provider: str, reason: str):
        super().__init__(f"translation provider {provider}", reason)
        self.error_code = "TRANSLATION_PROVIDER_ERROR"
        self.message_key = "error_translation_provider"
        self.params = {"provider": provider}
        self.provider = provider
        self.reason = reason


class PersistenceError(AppException):
    """A database write failed and was rolled back."""

    def __init__(self, resource: str, message: str):
        super().__init__(
            f"Could not save {resource}: {message}",
            "PERSISTENCE_ERROR",
            500,
            {"resource": resource},
            message_key="error_persistence_with_message",
            params={"resource": resource, "message": message},
        )
