from __future__ import annotations

import json
import logging
from abc import abstractmethod
from collections.abc import Sequence
from typing import Any

import httpx
from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

from translation_gateway.core.config import BackendConfig
from translation_gateway.core.errors import (
    BackendCallError,
    EmptyResponseError,
    InvalidJSONError,
    InvalidResponseFormatError,
)
from translation_gateway.integrations.providers.base import ProviderAdapter
from translation_gateway.schemas.translation import TranslationItem, TranslationMessage


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a translation assistant. Always respond in the provided JSON schema.\n"
    "Translate only the 'value' field of each message from the source locale to the target locale.\n"
    "Preserve every item and message ID exactly and do not modify keys.\n"
    "Preserve meaning and keep the tone of a marketing slogan.\n"
    "No extra text. No comments."
)

TRANSLATION_RESPONSE_SCHEMA: dict[str, Any] = {
    "name": "translation_response",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "targetLocale": {"type": "string"},
            "items": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string"},
                        "messages": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "id": {"type": "string"},
                                    "value": {"type": "string"},
                                },
                                "required": ["id", "value"],
                                "additionalProperties": False,
                            },
                        },
                    },
                    "required": ["id", "messages"],
                    "additionalProperties": False,
                },
            },
        },
        "required": ["targetLocale", "items"],
        "additionalProperties": False,
    },
}


class ChatCompletionAdapter(ProviderAdapter):
    """Batch adapter sending every item for a locale in one structured chat completion."""

    name = "chat-completion"

    def __init__(self, config: BackendConfig, client: AsyncOpenAI) -> None:
        super().__init__(config)
        self._client = client

    @property
    @abstractmethod
    def model(self) -> str:
        """Model or deployment name sent with each completion."""

    def build_request(
        self,
        source_locale: str,
        target_locale: str,
        items: Sequence[TranslationItem],
    ) -> dict[str, Any]:
        user_payload = {
            "sourceLocale": source_locale,
            "targetLocale": target_locale,
            "items": [item.model_dump() for item in items],
        }
        return {
            "model": self.model,
            "temperature": 0.0,
            "top_p": 1.0,
            "frequency_penalty": 0.0,
            "presence_penalty": 0.0,
            "response_format": {
                "type": "json_schema",
                "json_schema": TRANSLATION_RESPONSE_SCHEMA,
            },
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": json.dumps(user_payload, ensure_ascii=False)},
            ],
        }

    async def translate_batch(
        self,
        source_locale: str,
        target_locale: str,
        items: Sequence[TranslationItem],
    ) -> list[TranslationItem]:
        request = self.build_request(source_locale, target_locale, items)
        logger.info(
            "%s call: model=%s source=%s target=%s items=%d",
            self.name,
            self.model,
            source_locale,
            target_locale,
            len(items),
        )
        try:
            response = await self._client.chat.completions.create(**request)
        except OpenAIError as exc:
            logger.warning("%s call failed for locale %s", self.name, target_locale, exc_info=exc)
            raise BackendCallError(self.name, target_locale, type(exc).__name__) from exc

        content = response.choices[0].message.content if response.choices else None
        return self.parse_response(content, target_locale, items)

    def parse_response(
        self,
        content: str | None,
        target_locale: str,
        items: Sequence[TranslationItem],
    ) -> list[TranslationItem]:
        """Validate the structured completion and copy identifiers from the request."""
        if not content:
            logger.error("Empty response from %s for locale %s", self.name, target_locale)
            raise EmptyResponseError()

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.error("Unparseable %s response for locale %s", self.name, target_locale)
            raise InvalidJSONError() from exc

        if not isinstance(parsed, dict) or not parsed.get("targetLocale") or "items" not in parsed:
            raise InvalidResponseFormatError()
        if parsed["targetLocale"] != target_locale:
            logger.warning(
                "%s echoed targetLocale %r for requested %s",
                self.name,
                parsed["targetLocale"],
                target_locale,
            )

        returned = parsed["items"]
        if not isinstance(returned, list) or len(returned) != len(items):
            raise InvalidResponseFormatError()

        translated: list[TranslationItem] = []
        for source_item, candidate in zip(items, returned):
            translated.append(_merge_item(source_item, candidate))
        return translated

    async def aclose(self) -> None:
        await self._client.close()


def _merge_item(source_item: TranslationItem, candidate: Any) -> TranslationItem:
    if not isinstance(candidate, dict) or candidate.get("id") != source_item.id:
        raise InvalidResponseFormatError()
    messages = candidate.get("messages")
    if not isinstance(messages, list) or len(messages) != len(source_item.messages):
        raise InvalidResponseFormatError()

    merged: list[TranslationMessage] = []
    for source_message, translated in zip(source_item.messages, messages):
        if (
            not isinstance(translated, dict)
            or translated.get("id") != source_message.id
            or not isinstance(translated.get("value"), str)
        ):
            raise InvalidResponseFormatError()
        merged.append(TranslationMessage(id=source_message.id, value=translated["value"]))
    return TranslationItem(id=source_item.id, messages=merged)


class OpenAIChatAdapter(ChatCompletionAdapter):
    name = "openai"

    def __init__(
        self,
        config: BackendConfig,
        *,
        client: AsyncOpenAI | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            config,
            client
            or AsyncOpenAI(
                api_key=config["OPENAI_API_KEY"],
                timeout=config.timeout,
                max_retries=0,
                http_client=http_client,
            ),
        )

    @property
    def model(self) -> str:
        return self._config["OPENAI_MODEL"]


class AzureOpenAIChatAdapter(ChatCompletionAdapter):
    name = "azure"

    def __init__(
        self,
        config: BackendConfig,
        *,
        client: AsyncAzureOpenAI | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            config,
            client
            or AsyncAzureOpenAI(
                api_key=config["AZURE_OPENAI_API_KEY"],
                azure_endpoint=config["AZURE_OPENAI_ENDPOINT"],
                api_version=config["AZURE_OPENAI_API_VERSION"],
                timeout=config.timeout,
                max_retries=0,
                http_client=http_client,
            ),
        )

    @property
    def model(self) -> str:
        return self._config["AZURE_OPENAI_DEPLOYMENT_NAME"]
