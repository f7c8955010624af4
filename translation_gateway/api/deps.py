from fastapi import Depends

from translation_gateway.core.config import AppSettings, get_settings
from translation_gateway.services.locale_catalog import LocaleCatalog
from translation_gateway.services.translation import TranslationService

_locale_catalog: LocaleCatalog | None = None


async def get_app_settings() -> AppSettings:
    """Provide the cached application settings."""
    return get_settings()


async def get_translation_service(
    settings: AppSettings = Depends(get_app_settings),
) -> TranslationService:
    """Provide a request-scoped TranslationService."""
    return TranslationService(settings)


async def get_locale_catalog() -> LocaleCatalog:
    """Provide the LocaleCatalog singleton, loaded once per process."""
    global _locale_catalog
    if _locale_catalog is None:
        _locale_catalog = LocaleCatalog.from_settings(get_settings())
    return _locale_catalog
