from __future__ import annotations

import json

import httpx
import pytest

from translation_gateway.core.config import BackendConfig
from translation_gateway.core.errors import BackendCallError, InvalidResponseError
from translation_gateway.integrations.providers import DeepLAdapter, LocaleStatus
from translation_gateway.integrations.providers.deepl import (
    deepl_base_url,
    deepl_target_language,
)
from translation_gateway.schemas.translation import TranslationItem


class RecordingTransport:
    def __init__(self, responder) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def factory(self):
        return lambda: httpx.AsyncClient(transport=httpx.MockTransport(self))


def _adapter(transport: RecordingTransport, api_key: str = "deepl-key:fx") -> DeepLAdapter:
    config = BackendConfig(backend="deepl", values={"DEEPL_API_KEY": api_key})
    return DeepLAdapter(config, client_factory=transport.factory())


def _translate_upper(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    text = body["text"][0]
    return httpx.Response(
        200,
        json={"translations": [{"detected_source_language": "EN", "text": text.upper()}]},
    )


def _items(*specs: tuple[str, list[tuple[str, str]]]) -> list[TranslationItem]:
    return [
        TranslationItem.model_validate(
            {"id": item_id, "messages": [{"id": mid, "value": value} for mid, value in messages]}
        )
        for item_id, messages in specs
    ]


def test_base_url_depends_on_key_plan() -> None:
    assert deepl_base_url("abc:fx") == "https://api-free.deepl.com/v2"
    assert deepl_base_url("abc") == "https://api.deepl.com/v2"


@pytest.mark.parametrize(
    ("locale", "expected"),
    [
        ("de-DE", "DE"),
        ("fr-FR", "FR"),
        ("en-GB", "EN-GB"),
        ("en", "EN-US"),
        ("pt-PT", "PT-PT"),
        ("pt-BR", "PT-BR"),
        ("th-TH", "TH"),
    ],
)
def test_target_language_mapping(locale: str, expected: str) -> None:
    assert deepl_target_language(locale) == expected


@pytest.mark.asyncio
async def test_translate_sends_uppercase_target_and_auth_header() -> None:
    transport = RecordingTransport(_translate_upper)
    adapter = _adapter(transport)

    result = await adapter.translate("guten tag", "en-US", "de-DE")

    assert result == "GUTEN TAG"
    request = transport.requests[0]
    assert str(request.url) == "https://api-free.deepl.com/v2/translate"
    assert request.headers["Authorization"] == "DeepL-Auth-Key deepl-key:fx"
    assert json.loads(request.content) == {"text": ["guten tag"], "target_lang": "DE"}


@pytest.mark.asyncio
async def test_unsupported_locale_is_skipped_without_calling_api() -> None:
    transport = RecordingTransport(_translate_upper)
    adapter = _adapter(transport)

    outcome = await adapter.translate_locale(
        "en-US", "th-TH", _items(("1", [("m1", "Buy now")]))
    )

    assert outcome.status is LocaleStatus.SKIPPED
    assert outcome.items == []
    assert transport.requests == []


@pytest.mark.asyncio
async def test_target_lang_rejection_skips_only_that_message() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["text"][0] == "unsupported":
            return httpx.Response(400, json={"message": "Value for 'target_lang' not supported."})
        return _translate_upper(request)

    transport = RecordingTransport(responder)
    adapter = _adapter(transport)
    items = _items(
        ("1", [("m1", "unsupported"), ("m2", "keep me")]),
        ("2", [("m3", "unsupported")]),
        ("3", [("m4", "also kept")]),
    )

    outcome = await adapter.translate_locale("en-US", "fr-FR", items)

    assert outcome.status is LocaleStatus.COMPLETED
    assert [item.id for item in outcome.items] == ["1", "3"]
    assert [(m.id, m.value) for m in outcome.items[0].messages] == [("m2", "KEEP ME")]
    assert len(transport.requests) == 4


@pytest.mark.asyncio
async def test_empty_translations_array_is_invalid_response() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, json={"translations": []}))
    adapter = _adapter(transport)

    with pytest.raises(InvalidResponseError) as excinfo:
        await adapter.translate("hello", "en-US", "fr-FR")

    assert excinfo.value.message == "Invalid response structure from DeepL API"


@pytest.mark.asyncio
async def test_quota_errors_fail_the_locale() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(456, json={"message": "Quota exceeded"}))
    adapter = _adapter(transport, api_key="pro-key")

    outcome = await adapter.translate_locale("en-US", "fr-FR", _items(("1", [("m1", "hi")])))

    assert outcome.status is LocaleStatus.FAILED
    assert isinstance(outcome.error, BackendCallError)
    assert outcome.error.message == "deepl API call failed for locale fr-FR: DeepL quota exceeded"
    assert str(transport.requests[0].url).startswith("https://api.deepl.com/v2")


@pytest.mark.asyncio
async def test_aclose_releases_shared_client() -> None:
    transport = RecordingTransport(_translate_upper)
    clients: list[httpx.AsyncClient] = []

    def factory() -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        clients.append(client)
        return client

    config = BackendConfig(backend="deepl", values={"DEEPL_API_KEY": "deepl-key:fx"})
    adapter = DeepLAdapter(config, client_factory=factory)

    assert await adapter.translate("buy", "en-US", "fr-FR") == "BUY"
    assert await adapter.translate("save", "en-US", "fr-FR") == "SAVE"
    await adapter.aclose()

    assert len(transport.requests) == 2
    assert len(clients) == 1
    assert clients[0].is_closed
