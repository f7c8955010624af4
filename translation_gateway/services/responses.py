from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from translation_gateway.core.errors import TranslationGatewayError
from translation_gateway.schemas.translation import (
    TranslationErrorBody,
    TranslationItem,
    TranslationSuccessBody,
)


@dataclass(frozen=True, slots=True)
class ActionResponse:
    """Caller-facing envelope shared by the action runtime and the HTTP API."""

    status_code: int
    body: dict[str, Any]

    def to_action(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body}


def success_response(results: Mapping[str, Sequence[TranslationItem]]) -> ActionResponse:
    body = TranslationSuccessBody(
        status=200,
        results={locale: list(items) for locale, items in results.items()},
    )
    return ActionResponse(status_code=200, body=body.model_dump())


def error_response(status_code: int, message: str) -> ActionResponse:
    return ActionResponse(
        status_code=status_code,
        body=TranslationErrorBody(error=message).model_dump(),
    )


def error_response_from(exc: TranslationGatewayError) -> ActionResponse:
    return error_response(exc.status_code, exc.message)
