from __future__ import annotations


class TranslationGatewayError(RuntimeError):
    """Base error carrying the HTTP status and a caller-safe message."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(TranslationGatewayError):
    """Raised when the inbound translation request is malformed."""

    status_code = 400


class ConfigurationError(TranslationGatewayError):
    """Raised when backend configuration is missing or unusable."""

    def __init__(self, message: str, *, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


class UnsupportedBackendError(TranslationGatewayError):
    """Raised when TRANSLATION_SERVICE names an unknown backend."""

    def __init__(self, service: str) -> None:
        super().__init__(f"Unsupported translation service: {service}")
        self.service = service


class BackendCallError(TranslationGatewayError):
    """Raised when the upstream translation API call fails."""

    def __init__(self, backend: str, locale: str, detail: str | None = None) -> None:
        message = f"{backend} API call failed for locale {locale}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.backend = backend
        self.locale = locale


class InvalidResponseError(TranslationGatewayError):
    """Raised when a per-message backend returns no usable translation."""


class EmptyResponseError(InvalidResponseError):
    def __init__(self) -> None:
        super().__init__("Empty response from translation service")


class InvalidJSONError(InvalidResponseError):
    def __init__(self) -> None:
        super().__init__("Invalid JSON response from translation service")


class InvalidResponseFormatError(InvalidResponseError):
    def __init__(self) -> None:
        super().__init__("Invalid response format from translation service")


class LanguageNotSupportedError(Exception):
    """Signals that a backend cannot serve the requested target language.

    Adapters that tolerate unsupported locales treat this as a skip; it never
    reaches the caller.
    """

    def __init__(self, backend: str, language: str) -> None:
        super().__init__(f"Target language {language} is not supported by {backend}")
        self.backend = backend
        self.language = language
