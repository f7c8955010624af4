from __future__ import annotations

import logging

import httpx
from openai import OpenAIError

from translation_gateway.core.config import DEFAULT_TRANSLATION_SERVICE, AppSettings, BackendConfig
from translation_gateway.core.errors import ConfigurationError, UnsupportedBackendError
from translation_gateway.integrations.providers import (
    AzureOpenAIChatAdapter,
    DeepLAdapter,
    GoogleTranslateAdapter,
    OpenAIChatAdapter,
    ProviderAdapter,
)


logger = logging.getLogger(__name__)

REQUIRED_SETTINGS: dict[str, tuple[str, ...]] = {
    "google": ("GOOGLE_TRANSLATE_API_KEY", "GOOGLE_CLOUD_PROJECT_ID"),
    "openai": ("OPENAI_API_KEY", "OPENAI_MODEL"),
    "azure": (
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_ENDPOINT",
        "AZURE_OPENAI_API_VERSION",
        "AZURE_OPENAI_DEPLOYMENT_NAME",
    ),
    "deepl": ("DEEPL_API_KEY",),
}

_ADAPTERS: dict[str, type[ProviderAdapter]] = {
    "google": GoogleTranslateAdapter,
    "openai": OpenAIChatAdapter,
    "azure": AzureOpenAIChatAdapter,
    "deepl": DeepLAdapter,
}


def resolve_service(settings: AppSettings, service: str | None = None) -> str:
    """Return the normalized backend identifier, validating it is supported."""
    raw = service or settings.translation_service or DEFAULT_TRANSLATION_SERVICE
    normalized = raw.strip().lower()
    if normalized not in REQUIRED_SETTINGS:
        logger.error(
            "Unsupported translation service: %s. Supported: %s",
            raw,
            ", ".join(REQUIRED_SETTINGS),
        )
        raise UnsupportedBackendError(raw)
    return normalized


def build_backend_config(settings: AppSettings, service: str | None = None) -> BackendConfig:
    """Collect and validate every setting the chosen backend requires.

    All missing keys are reported together so operators can fix the
    deployment in one pass.
    """
    backend = resolve_service(settings, service)
    required = REQUIRED_SETTINGS[backend]

    values: dict[str, str] = {}
    missing: list[str] = []
    for key in required:
        value = settings.value_for(key)
        if value:
            values[key] = value
        else:
            missing.append(key)
        logger.debug("%s: %s", key, "SET" if value else "MISSING")

    if missing:
        logger.error("Missing required configuration for %s: %s", backend, missing)
        raise ConfigurationError(
            f"Missing required environment variables for {backend}: {', '.join(missing)}",
            missing=missing,
        )

    return BackendConfig(
        backend=backend,
        values=values,
        timeout=settings.translation_request_timeout,
    )


def select_backend(settings: AppSettings, service: str | None = None) -> ProviderAdapter:
    """Return a fully initialized adapter for the configured translation backend."""
    config = build_backend_config(settings, service)
    adapter_cls = _ADAPTERS[config.backend]
    try:
        adapter = adapter_cls(config)
    except (OpenAIError, ValueError, TypeError, httpx.InvalidURL) as exc:
        logger.error("Failed to initialize %s translation client", config.backend, exc_info=exc)
        raise ConfigurationError(
            f"Failed to initialize {config.backend} translation client"
        ) from exc

    logger.info("Using %s translation service", config.backend)
    return adapter
