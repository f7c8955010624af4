"""Provider-agnostic translation dispatch for Google, DeepL, OpenAI and Azure OpenAI."""

__version__ = "0.1.0"
