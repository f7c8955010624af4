from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from translation_gateway.core.errors import ValidationError

_LOCALE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$")


class TranslationMessage(BaseModel):
    id: str = Field(..., description="Stable message identifier, preserved verbatim.")
    value: str = Field(..., description="Source text, or translated text in responses.")


class TranslationItem(BaseModel):
    id: str = Field(..., description="Item identifier, unique within a request.")
    messages: list[TranslationMessage] = Field(default_factory=list)


class TranslationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_locale: str = Field(..., alias="sourceLocale")
    target_locales: list[str] = Field(..., alias="targetLocales")
    items: list[TranslationItem]


class TranslationSuccessBody(BaseModel):
    status: int = Field(default=200)
    results: dict[str, list[TranslationItem]] = Field(
        default_factory=dict,
        description="Translated items keyed by target locale; skipped locales are absent.",
    )


class TranslationErrorBody(BaseModel):
    error: str


def decode_request_body(raw: str | bytes) -> dict[str, Any]:
    """Parse a raw JSON request body into a mapping."""
    try:
        payload = json.loads(raw) if raw else {}
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Invalid JSON in request body") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def parse_translation_request(payload: Mapping[str, Any]) -> TranslationRequest:
    """Validate an inbound payload and return the normalized request.

    Raises ``ValidationError`` with a caller-facing message for every
    malformed shape; no backend is contacted before this succeeds.
    """
    source_locale = payload.get("sourceLocale")
    target_locales = payload.get("targetLocales")
    items = payload.get("items")

    if not source_locale or not isinstance(source_locale, str):
        raise ValidationError("sourceLocale is required")
    if not isinstance(target_locales, list) or not target_locales:
        raise ValidationError("targetLocales must be a non-empty array")
    if not isinstance(items, list) or not items:
        raise ValidationError("items must be a non-empty array")

    for locale in [source_locale, *target_locales]:
        if not isinstance(locale, str) or not _LOCALE_PATTERN.match(locale):
            raise ValidationError(f"Invalid locale: {locale!r}")

    try:
        request = TranslationRequest(
            sourceLocale=source_locale,
            targetLocales=target_locales,
            items=items,
        )
    except PydanticValidationError as exc:
        raise ValidationError(_describe_validation_error(exc)) from exc

    seen: set[str] = set()
    for item in request.items:
        if item.id in seen:
            raise ValidationError(f"Duplicate item id: {item.id}")
        seen.add(item.id)
    return request


def _describe_validation_error(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid request field {location}: {first.get('msg', 'invalid value')}"
