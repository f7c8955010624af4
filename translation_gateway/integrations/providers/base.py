from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

import httpx

from translation_gateway.core.config import BackendConfig
from translation_gateway.core.errors import LanguageNotSupportedError, TranslationGatewayError
from translation_gateway.schemas.translation import TranslationItem, TranslationMessage


logger = logging.getLogger(__name__)


class LocaleStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(slots=True)
class LocaleOutcome:
    """Result of running one adapter against one target locale."""

    locale: str
    status: LocaleStatus
    items: list[TranslationItem] = field(default_factory=list)
    error: TranslationGatewayError | None = None

    @classmethod
    def completed(cls, locale: str, items: list[TranslationItem]) -> LocaleOutcome:
        return cls(locale=locale, status=LocaleStatus.COMPLETED, items=items)

    @classmethod
    def skipped(cls, locale: str) -> LocaleOutcome:
        return cls(locale=locale, status=LocaleStatus.SKIPPED)

    @classmethod
    def failed(cls, locale: str, error: TranslationGatewayError) -> LocaleOutcome:
        return cls(locale=locale, status=LocaleStatus.FAILED, error=error)


@dataclass(frozen=True, slots=True)
class MessageContext:
    """Identifies the message a single-text translation call belongs to."""

    item_id: str
    message_id: str


class ProviderAdapter(ABC):
    """Shared contract for every translation backend."""

    name: str = "provider"

    def __init__(self, config: BackendConfig) -> None:
        self._config = config

    @abstractmethod
    async def translate_batch(
        self,
        source_locale: str,
        target_locale: str,
        items: Sequence[TranslationItem],
    ) -> list[TranslationItem]:
        """Translate every item for one target locale."""

    async def translate_locale(
        self,
        source_locale: str,
        target_locale: str,
        items: Sequence[TranslationItem],
    ) -> LocaleOutcome:
        """Run the adapter for one locale and fold the result into a ``LocaleOutcome``."""
        try:
            translated = await self.translate_batch(source_locale, target_locale, items)
        except LanguageNotSupportedError as exc:
            logger.warning("%s cannot serve locale %s: %s", self.name, target_locale, exc)
            return LocaleOutcome.skipped(target_locale)
        except TranslationGatewayError as exc:
            logger.error("%s translation failed for locale %s: %s", self.name, target_locale, exc)
            return LocaleOutcome.failed(target_locale, exc)

        if not translated:
            return LocaleOutcome.skipped(target_locale)
        return LocaleOutcome.completed(target_locale, translated)

    async def aclose(self) -> None:
        """Release network clients held by the adapter."""
        return None


class MessageProviderAdapter(ProviderAdapter):
    """Adapter for backends that translate one string per call."""

    # Errors that drop the current message instead of failing the locale.
    skippable_errors: tuple[type[Exception], ...] = ()

    @abstractmethod
    async def translate(
        self,
        text: str,
        source_locale: str,
        target_locale: str,
        context: MessageContext | None = None,
    ) -> str:
        """Translate a single string."""

    async def translate_batch(
        self,
        source_locale: str,
        target_locale: str,
        items: Sequence[TranslationItem],
    ) -> list[TranslationItem]:
        translated_items: list[TranslationItem] = []
        skipped_messages = 0
        for item in items:
            messages: list[TranslationMessage] = []
            for message in item.messages:
                context = MessageContext(item_id=item.id, message_id=message.id)
                try:
                    value = await self.translate(
                        message.value,
                        source_locale,
                        target_locale,
                        context=context,
                    )
                except self.skippable_errors as exc:
                    skipped_messages += 1
                    logger.debug(
                        "Skipping message %s/%s for %s: %s",
                        item.id,
                        message.id,
                        target_locale,
                        exc,
                    )
                    continue
                messages.append(TranslationMessage(id=message.id, value=value))

            if messages:
                translated_items.append(TranslationItem(id=item.id, messages=messages))

        if skipped_messages:
            logger.warning(
                "%s skipped %d message(s) for locale %s",
                self.name,
                skipped_messages,
                target_locale,
            )
        return translated_items


class HTTPProviderAdapter(MessageProviderAdapter):
    """Per-message adapter that reuses one ``httpx.AsyncClient`` for every call."""

    def __init__(
        self,
        config: BackendConfig,
        *,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        super().__init__(config)
        timeout = httpx.Timeout(config.timeout)
        factory = client_factory or (lambda: httpx.AsyncClient(timeout=timeout))
        self._client = factory()

    async def aclose(self) -> None:
        await self._client.aclose()
