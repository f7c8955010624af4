from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from translation_gateway.core.config import AppSettings
from translation_gateway.schemas.locales import SupportedLocale, SupportedLocalesResponse


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleCatalog:
    """Read-only list of locales the deployment advertises as translatable."""

    locales: tuple[SupportedLocale, ...]

    @classmethod
    def from_settings(cls, settings: AppSettings) -> LocaleCatalog:
        locales = tuple(SupportedLocale(**entry) for entry in settings.supported_locales)
        logger.info("Locale catalog initialized with %d locales", len(locales))
        return cls(locales=locales)

    def __iter__(self) -> Iterator[SupportedLocale]:
        return iter(self.locales)

    def __len__(self) -> int:
        return len(self.locales)

    def codes(self) -> list[str]:
        return [locale.code for locale in self.locales]

    def to_response(self) -> SupportedLocalesResponse:
        return SupportedLocalesResponse(locales=list(self.locales))
