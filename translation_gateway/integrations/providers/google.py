from __future__ import annotations

import logging
from typing import Callable

import httpx

from translation_gateway.core.config import BackendConfig
from translation_gateway.core.errors import BackendCallError, InvalidResponseError
from translation_gateway.integrations.locale_codes import to_language_code
from translation_gateway.integrations.providers.base import HTTPProviderAdapter, MessageContext


logger = logging.getLogger(__name__)

GOOGLE_TRANSLATE_ENDPOINT = "https://translation.googleapis.com/language/translate/v2"


class GoogleTranslateAdapter(HTTPProviderAdapter):
    """Google Cloud Translation (v2) REST adapter translating one string per call."""

    name = "google"

    def __init__(
        self,
        config: BackendConfig,
        *,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        super().__init__(config, client_factory=client_factory)
        self._api_key = config["GOOGLE_TRANSLATE_API_KEY"]
        self._project_id = config["GOOGLE_CLOUD_PROJECT_ID"]
        self._endpoint = GOOGLE_TRANSLATE_ENDPOINT

    async def translate(
        self,
        text: str,
        source_locale: str,
        target_locale: str,
        context: MessageContext | None = None,
    ) -> str:
        if not text:
            return ""

        language_code = to_language_code(target_locale)
        logger.debug(
            "Google Translate call: %d chars -> %s (from %s)",
            len(text),
            language_code,
            target_locale,
        )

        try:
            response = await self._client.post(
                self._endpoint,
                params={"key": self._api_key},
                headers={"x-goog-user-project": self._project_id},
                json={"q": text, "target": language_code, "format": "text"},
            )
        except httpx.HTTPError as exc:
            raise BackendCallError(self.name, target_locale, type(exc).__name__) from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise BackendCallError(self.name, target_locale, _extract_error(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidResponseError("Invalid response structure from Google Translate API") from exc

        translations = (payload.get("data") or {}).get("translations") if isinstance(payload, dict) else None
        if not translations or "translatedText" not in translations[0]:
            raise InvalidResponseError("Invalid response structure from Google Translate API")
        return translations[0]["translatedText"]


def _extract_error(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        message = payload["error"].get("message")
        if message:
            return f"Google Translate error {response.status_code}: {message}"
    return f"Google Translate request failed with status {response.status_code}"
