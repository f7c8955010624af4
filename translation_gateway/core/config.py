from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TRANSLATION_SERVICE = "azure"

_DEFAULT_SUPPORTED_LOCALES: tuple[dict[str, str], ...] = (
    {"code": "fr-FR", "label": "French"},
    {"code": "de-DE", "label": "German"},
    {"code": "it-IT", "label": "Italian"},
    {"code": "es-ES", "label": "Spanish (Spain)"},
    {"code": "nl-NL", "label": "Dutch"},
)


class AppSettings(BaseSettings):
    """Application configuration loaded from environment or .env."""

    app_name: str = Field(default="Translation Gateway", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )

    translation_service: str = Field(
        default=DEFAULT_TRANSLATION_SERVICE, alias="TRANSLATION_SERVICE"
    )
    translation_request_timeout: float = Field(
        default=30.0, alias="TRANSLATION_REQUEST_TIMEOUT"
    )
    supported_locales: list[dict[str, str]] = Field(
        default_factory=lambda: [dict(entry) for entry in _DEFAULT_SUPPORTED_LOCALES],
        alias="SUPPORTED_LOCALES",
    )

    google_translate_api_key: Optional[SecretStr] = Field(
        default=None, alias="GOOGLE_TRANSLATE_API_KEY"
    )
    google_cloud_project_id: Optional[str] = Field(
        default=None, alias="GOOGLE_CLOUD_PROJECT_ID"
    )
    openai_api_key: Optional[SecretStr] = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: Optional[str] = Field(default=None, alias="OPENAI_MODEL")
    azure_openai_api_key: Optional[SecretStr] = Field(default=None, alias="AZURE_OPENAI_API_KEY")
    azure_openai_endpoint: Optional[str] = Field(default=None, alias="AZURE_OPENAI_ENDPOINT")
    azure_openai_api_version: Optional[str] = Field(default=None, alias="AZURE_OPENAI_API_VERSION")
    azure_openai_deployment_name: Optional[str] = Field(
        default=None, alias="AZURE_OPENAI_DEPLOYMENT_NAME"
    )
    deepl_api_key: Optional[SecretStr] = Field(default=None, alias="DEEPL_API_KEY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @classmethod
    def setting_aliases(cls) -> frozenset[str]:
        return frozenset(
            info.alias for info in cls.model_fields.values() if info.alias
        )

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> AppSettings:
        """Build settings for one invocation, letting action parameters override the environment."""
        aliases = cls.setting_aliases()
        overrides = {
            key: value
            for key, value in params.items()
            if key in aliases and value is not None
        }
        return cls(**overrides)

    def value_for(self, alias: str) -> str | None:
        """Return the plain string value configured under an upper-case setting alias."""
        for name, info in type(self).model_fields.items():
            if info.alias != alias:
                continue
            value = getattr(self, name)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if value is None:
                return None
            return str(value).strip()
        raise KeyError(alias)

    def secret_values(self) -> list[str]:
        secrets: list[str] = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, SecretStr) and value.get_secret_value():
                secrets.append(value.get_secret_value())
        return secrets


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Immutable view over the settings one translation backend needs."""

    backend: str
    values: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 30.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, key: str) -> str:
        return self.values[key]

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.values.get(key, default)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings."""
    return AppSettings()  # type: ignore[call-arg]
