from translation_gateway.integrations.providers.base import (
    HTTPProviderAdapter,
    LocaleOutcome,
    LocaleStatus,
    MessageContext,
    MessageProviderAdapter,
    ProviderAdapter,
)
from translation_gateway.integrations.providers.chat_completion import (
    AzureOpenAIChatAdapter,
    ChatCompletionAdapter,
    OpenAIChatAdapter,
)
from translation_gateway.integrations.providers.deepl import DeepLAdapter
from translation_gateway.integrations.providers.google import GoogleTranslateAdapter

__all__ = [
    "AzureOpenAIChatAdapter",
    "ChatCompletionAdapter",
    "DeepLAdapter",
    "GoogleTranslateAdapter",
    "HTTPProviderAdapter",
    "LocaleOutcome",
    "LocaleStatus",
    "MessageContext",
    "MessageProviderAdapter",
    "OpenAIChatAdapter",
    "ProviderAdapter",
]
