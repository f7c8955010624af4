from __future__ import annotations

import json

import httpx
import pytest

from translation_gateway.core.config import BackendConfig
from translation_gateway.core.errors import BackendCallError, InvalidResponseError
from translation_gateway.integrations.providers import GoogleTranslateAdapter, LocaleStatus
from translation_gateway.schemas.translation import TranslationItem


class RecordingTransport:
    """Serve canned Google Translate responses and record every request."""

    def __init__(self, responder) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def factory(self):
        return lambda: httpx.AsyncClient(transport=httpx.MockTransport(self))


def _config() -> BackendConfig:
    return BackendConfig(
        backend="google",
        values={
            "GOOGLE_TRANSLATE_API_KEY": "g-secret",
            "GOOGLE_CLOUD_PROJECT_ID": "demo-project",
        },
    )


def _echo_french(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(
        200,
        json={"data": {"translations": [{"translatedText": f"[fr] {body['q']}"}]}},
    )


@pytest.mark.asyncio
async def test_translate_posts_language_code_and_credentials() -> None:
    transport = RecordingTransport(_echo_french)
    adapter = GoogleTranslateAdapter(_config(), client_factory=transport.factory())

    translated = await adapter.translate("Buy now", "en-US", "fr-FR")

    assert translated == "[fr] Buy now"
    request = transport.requests[0]
    assert request.url.host == "translation.googleapis.com"
    assert request.url.params["key"] == "g-secret"
    assert request.headers["x-goog-user-project"] == "demo-project"
    assert json.loads(request.content) == {"q": "Buy now", "target": "fr", "format": "text"}


@pytest.mark.asyncio
async def test_translate_locale_preserves_identifiers() -> None:
    transport = RecordingTransport(_echo_french)
    adapter = GoogleTranslateAdapter(_config(), client_factory=transport.factory())
    items = [
        TranslationItem.model_validate(
            {"id": "1", "messages": [{"id": "m1", "value": "Buy now"}, {"id": "m2", "value": "Save"}]}
        ),
        TranslationItem.model_validate({"id": "2", "messages": [{"id": "m3", "value": "Hello"}]}),
    ]

    outcome = await adapter.translate_locale("en-US", "fr-FR", items)

    assert outcome.status is LocaleStatus.COMPLETED
    assert [item.id for item in outcome.items] == ["1", "2"]
    assert [message.id for message in outcome.items[0].messages] == ["m1", "m2"]
    assert outcome.items[1].messages[0].value == "[fr] Hello"
    assert len(transport.requests) == 3


@pytest.mark.asyncio
async def test_http_error_is_fatal_for_locale() -> None:
    transport = RecordingTransport(
        lambda request: httpx.Response(403, json={"error": {"message": "API key not valid."}})
    )
    adapter = GoogleTranslateAdapter(_config(), client_factory=transport.factory())

    with pytest.raises(BackendCallError) as excinfo:
        await adapter.translate("Buy now", "en-US", "de-DE")

    message = excinfo.value.message
    assert message.startswith("google API call failed for locale de-DE")
    assert "API key not valid." in message
    assert "g-secret" not in message


@pytest.mark.asyncio
async def test_transport_error_fails_locale_outcome() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = RecordingTransport(refuse)
    adapter = GoogleTranslateAdapter(_config(), client_factory=transport.factory())
    items = [TranslationItem.model_validate({"id": "1", "messages": [{"id": "m1", "value": "Hi"}]})]

    outcome = await adapter.translate_locale("en-US", "it-IT", items)

    assert outcome.status is LocaleStatus.FAILED
    assert isinstance(outcome.error, BackendCallError)
    assert outcome.items == []


@pytest.mark.asyncio
async def test_missing_translations_is_invalid_response() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, json={"data": {}}))
    adapter = GoogleTranslateAdapter(_config(), client_factory=transport.factory())

    with pytest.raises(InvalidResponseError):
        await adapter.translate("Buy now", "en-US", "fr-FR")


@pytest.mark.asyncio
async def test_empty_text_skips_network_call() -> None:
    transport = RecordingTransport(_echo_french)
    adapter = GoogleTranslateAdapter(_config(), client_factory=transport.factory())

    assert await adapter.translate("", "en-US", "fr-FR") == ""
    assert transport.requests == []


@pytest.mark.asyncio
async def test_one_client_serves_every_message_until_closed() -> None:
    transport = RecordingTransport(_echo_french)
    clients: list[httpx.AsyncClient] = []

    def factory() -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        clients.append(client)
        return client

    adapter = GoogleTranslateAdapter(_config(), client_factory=factory)
    items = [
        TranslationItem.model_validate(
            {"id": "1", "messages": [{"id": "m1", "value": "Buy now"}, {"id": "m2", "value": "Save"}]}
        ),
    ]

    await adapter.translate_locale("en-US", "fr-FR", items)
    await adapter.translate_locale("en-US", "de-DE", items)
    await adapter.aclose()

    assert len(transport.requests) == 4
    assert len(clients) == 1
    assert clients[0].is_closed
