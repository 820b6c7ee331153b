from functools import lru_cache
import os
from typing import Annotated, Any, Literal
import warnings

from pydantic import (
    AnyUrl,
    BeforeValidator,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from eventra.i18n.config import (
    DEFAULT_FALLBACK_ORDER,
    DEFAULT_LOCALE as DEFAULT_CONTENT_LOCALE,
    SUPPORTED_LOCALE_CODES,
    Locale,
)

DEFAULT_POSTGRES_PASSWORD = "changethis"


def parse_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = "/v1"
    PROJECT_NAME: str = "Eventra API"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    FRONTEND_URL: str = "http://localhost:3000"

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_list)] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """Return all CORS origins as strings."""
        origins = [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL.rstrip("/"))
        return origins

    # Full SQLAlchemy URL; takes precedence over the POSTGRES_* settings
    DATABASE_URL: str | None = None

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = DEFAULT_POSTGRES_PASSWORD
    POSTGRES_DB: str = "eventra"

    @field_validator("POSTGRES_PASSWORD", mode="after")
    @classmethod
    def reject_default_password(cls, v: str, info: ValidationInfo) -> str:
        env = info.data.get("ENVIRONMENT") or os.getenv("ENVIRONMENT", "local")
        if v != DEFAULT_POSTGRES_PASSWORD or env == "local":
            return v
        if env == "production":
            raise ValueError("the default POSTGRES_PASSWORD is not allowed in production")
        warnings.warn(f"POSTGRES_PASSWORD is the default in {env}", UserWarning, stacklevel=2)
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Build the database connection URI for SQLAlchemy."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # Content locales
    SUPPORTED_LOCALES: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        locale.value for locale in Locale
    ]
    DEFAULT_LOCALE: str = DEFAULT_CONTENT_LOCALE.value
    LOCALE_FALLBACK_ORDER: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        locale.value for locale in DEFAULT_FALLBACK_ORDER
    ]
    # Translate a missing locale the first time an event is read in it
    LOCALIZATION_BACKFILL_ON_READ: bool = False

    @field_validator("SUPPORTED_LOCALES", "LOCALE_FALLBACK_ORDER", mode="after")
    @classmethod
    def validate_locale_list(cls, v: list[str] | str) -> list[str]:
        """Normalize locale lists and reject codes outside the declared set."""
        codes = [v] if isinstance(v, str) else v
        result: list[str] = []
        for raw in codes:
            code = raw.strip().lower()
            if code not in SUPPORTED_LOCALE_CODES:
                raise ValueError(f"Unsupported locale: {raw}")
            if code not in result:
                result.append(code)
        return result

    @model_validator(mode="after")
    def validate_default_locale(self) -> "Settings":
        """Keep the default locale and every fallback locale inside SUPPORTED_LOCALES."""
        self.DEFAULT_LOCALE = self.DEFAULT_LOCALE.strip().lower()
        if self.DEFAULT_LOCALE not in self.SUPPORTED_LOCALES:
            raise ValueError(
                f"DEFAULT_LOCALE '{self.DEFAULT_LOCALE}' must be one of "
                f"SUPPORTED_LOCALES {self.SUPPORTED_LOCALES}"
            )
        disabled = [
            code
            for code in self.LOCALE_FALLBACK_ORDER
            if code not in self.SUPPORTED_LOCALES
        ]
        if disabled:
            raise ValueError(
                f"LOCALE_FALLBACK_ORDER contains {disabled} outside "
                f"SUPPORTED_LOCALES {self.SUPPORTED_LOCALES}"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supported_locales(self) -> list[Locale]:
        return [Locale(code) for code in self.SUPPORTED_LOCALES]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def fallback_order(self) -> list[Locale]:
        return [Locale(code) for code in self.LOCALE_FALLBACK_ORDER]

    # Machine translation
    TRANSLATE_PROVIDER: Literal["none", "google", "rest"] = "none"
    TRANSLATE_API_KEY: str | None = None
    # Required for "rest"; overrides the public endpoint for "google"
    TRANSLATE_API_URL: str | None = None
    TRANSLATE_TIMEOUT_SECONDS: float = 15.0
    # JSON file shaped {locale: {term: localized term}}; built-in table when unset
    GLOSSARY_PATH: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def translation_enabled(self) -> bool:
        """Whether the selected provider has the credentials or endpoint it needs."""
        if self.TRANSLATE_PROVIDER == "google":
            return bool(self.TRANSLATE_API_KEY)
        if self.TRANSLATE_PROVIDER == "rest":
            return bool(self.TRANSLATE_API_URL)
        return False

    # Geocoding (Nominatim compatible)
    GEOCODING_ENABLED: bool = True
    GEOCODING_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODING_USER_AGENT: str = "Eventra/1.0"
    GEOCODING_TIMEOUT_SECONDS: float = 10.0

    # Rate limits (slowapi syntax)
    DEFAULT_RATE_LIMIT: str = "100/minute"
    EVENT_WRITE_RATE_LIMIT: str = "10/minute"
    EVENT_IMPORT_RATE_LIMIT: str = "2/minute"
    BACKFILL_RATE_LIMIT: str = "20/minute"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
