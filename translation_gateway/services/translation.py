from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from translation_gateway.core.config import AppSettings
from translation_gateway.core.errors import TranslationGatewayError
from translation_gateway.integrations.providers import LocaleStatus, ProviderAdapter
from translation_gateway.schemas.translation import (
    TranslationItem,
    TranslationRequest,
    parse_translation_request,
)
from translation_gateway.services.backend_selector import select_backend
from translation_gateway.services.responses import (
    ActionResponse,
    error_response,
    error_response_from,
    success_response,
)

logger = logging.getLogger(__name__)

BackendSelector = Callable[[AppSettings], ProviderAdapter]


@dataclass(slots=True)
class TranslationRun:
    """Aggregated per-locale state for one translation request."""

    results: dict[str, list[TranslationItem]] = field(default_factory=dict)
    completed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class TranslationService:
    """Dispatches translation requests to the configured backend and aggregates results."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        selector: BackendSelector | None = None,
    ) -> None:
        self._settings = settings
        self._selector = selector or select_backend

    async def translate(self, request: TranslationRequest) -> TranslationRun:
        """Translate the request for every target locale in order.

        A skipped locale is left out of the results; the first failed locale
        aborts the whole request by raising its error.
        """
        logger.info(
            "Translation request: service=%s source=%s targets=[%s] items=%d",
            self._settings.translation_service,
            request.source_locale,
            ", ".join(request.target_locales),
            len(request.items),
        )
        adapter = self._selector(self._settings)
        run = TranslationRun()
        try:
            for target_locale in _unique_targets(request.target_locales):
                if _same_locale(target_locale, request.source_locale):
                    logger.info("Target %s matches the source locale; skipping", target_locale)
                    run.skipped.append(target_locale)
                    continue

                outcome = await adapter.translate_locale(
                    request.source_locale,
                    target_locale,
                    request.items,
                )
                if outcome.status is LocaleStatus.FAILED and outcome.error is not None:
                    raise outcome.error
                if outcome.status is LocaleStatus.COMPLETED and outcome.items:
                    run.results[target_locale] = outcome.items
                    run.completed.append(target_locale)
                    logger.info(
                        "Completed locale %s (%d items)", target_locale, len(outcome.items)
                    )
                else:
                    run.skipped.append(target_locale)
        finally:
            await adapter.aclose()

        logger.info(
            "Translation completed via %s: completed=[%s]",
            adapter.name,
            ", ".join(run.completed),
        )
        if run.skipped:
            logger.warning(
                "Skipped locales: %s (not supported by %s)", ", ".join(run.skipped), adapter.name
            )
        return run

    async def respond(self, payload: Mapping[str, Any] | TranslationRequest) -> ActionResponse:
        """Validate, translate and assemble the caller-facing response."""
        try:
            if isinstance(payload, TranslationRequest):
                request = payload
            else:
                request = parse_translation_request(payload)
            run = await self.translate(request)
        except TranslationGatewayError as exc:
            logger.info("%s: %s", exc.status_code, exc.message)
            return error_response_from(exc)
        except Exception:
            logger.exception("Failed to process translation request")
            return error_response(500, "Failed to process translation request")
        return success_response(run.results)


def _unique_targets(target_locales: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for locale in target_locales:
        if locale in seen:
            continue
        seen.add(locale)
        ordered.append(locale)
    return ordered


def _same_locale(first: str, second: str) -> bool:
    return first.replace("_", "-").lower() == second.replace("_", "-").lower()
