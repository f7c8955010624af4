from __future__ import annotations

import logging
from typing import Callable

import httpx

from translation_gateway.core.config import BackendConfig
from translation_gateway.core.errors import (
    BackendCallError,
    InvalidResponseError,
    LanguageNotSupportedError,
)
from translation_gateway.integrations.locale_codes import region_of, to_upper_language_code
from translation_gateway.integrations.providers.base import HTTPProviderAdapter, MessageContext


logger = logging.getLogger(__name__)

DEEPL_FREE_BASE_URL = "https://api-free.deepl.com/v2"
DEEPL_PRO_BASE_URL = "https://api.deepl.com/v2"
DEEPL_USER_AGENT = "Translation-Gateway/1.0"

# Target languages accepted by the DeepL /translate endpoint.
DEEPL_TARGET_LANGUAGES: frozenset[str] = frozenset(
    {
        "AR", "BG", "CS", "DA", "DE", "EL", "EN-GB", "EN-US", "ES", "ET", "FI",
        "FR", "HU", "ID", "IT", "JA", "KO", "LT", "LV", "NB", "NL", "PL",
        "PT-BR", "PT-PT", "RO", "RU", "SK", "SL", "SV", "TR", "UK", "ZH",
    }
)

# DeepL rejects bare EN and PT as targets.
_REGIONAL_DEFAULTS = {"EN": "EN-US", "PT": "PT-BR"}


def deepl_base_url(api_key: str) -> str:
    """Free-plan keys carry the ``:fx`` suffix and use a dedicated host."""
    return DEEPL_FREE_BASE_URL if api_key.endswith(":fx") else DEEPL_PRO_BASE_URL


def deepl_target_language(locale: str) -> str:
    language = to_upper_language_code(locale)
    if language not in _REGIONAL_DEFAULTS:
        return language
    region = region_of(locale)
    regional = f"{language}-{region}" if region else None
    if regional in DEEPL_TARGET_LANGUAGES:
        return regional
    return _REGIONAL_DEFAULTS[language]


class DeepLAdapter(HTTPProviderAdapter):
    """DeepL REST adapter; unsupported target languages are skipped, not failed."""

    name = "deepl"
    skippable_errors = (LanguageNotSupportedError,)

    def __init__(
        self,
        config: BackendConfig,
        *,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        super().__init__(config, client_factory=client_factory)
        self._api_key = config["DEEPL_API_KEY"]
        self._base_url = deepl_base_url(self._api_key)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def translate(
        self,
        text: str,
        source_locale: str,
        target_locale: str,
        context: MessageContext | None = None,
    ) -> str:
        target_language = deepl_target_language(target_locale)
        if target_language not in DEEPL_TARGET_LANGUAGES:
            raise LanguageNotSupportedError(self.name, target_language)
        if not text:
            return ""

        headers = {
            "Authorization": f"DeepL-Auth-Key {self._api_key}",
            "Content-Type": "application/json",
            "User-Agent": DEEPL_USER_AGENT,
        }
        try:
            response = await self._client.post(
                f"{self._base_url}/translate",
                headers=headers,
                json={"text": [text], "target_lang": target_language},
            )
        except httpx.HTTPError as exc:
            raise BackendCallError(self.name, target_locale, type(exc).__name__) from exc

        if response.status_code == 400 and _mentions_target_lang(response):
            raise LanguageNotSupportedError(self.name, target_language)
        if response.status_code in (401, 403):
            raise BackendCallError(self.name, target_locale, "DeepL authentication failed")
        if response.status_code == 456:
            raise BackendCallError(self.name, target_locale, "DeepL quota exceeded")
        if response.status_code == 429:
            raise BackendCallError(self.name, target_locale, "DeepL request throttled")
        if response.status_code != 200:
            raise BackendCallError(
                self.name,
                target_locale,
                f"DeepL request failed with status {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidResponseError("Invalid response structure from DeepL API") from exc

        translations = payload.get("translations") if isinstance(payload, dict) else None
        if not translations or not isinstance(translations[0], dict) or "text" not in translations[0]:
            raise InvalidResponseError("Invalid response structure from DeepL API")
        return translations[0]["text"]


def _mentions_target_lang(response: httpx.Response) -> bool:
    try:
        payload = response.json()
    except ValueError:
        return False
    if not isinstance(payload, dict):
        return False
    message = str(payload.get("message") or "")
    return "target_lang" in message
