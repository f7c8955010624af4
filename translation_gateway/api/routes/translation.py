from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from translation_gateway.api.deps import get_translation_service
from translation_gateway.schemas.translation import (
    TranslationErrorBody,
    TranslationSuccessBody,
    decode_request_body,
)
from translation_gateway.services.translation import TranslationService

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="Translate a batch of items into every requested target locale.",
    responses={
        200: {"model": TranslationSuccessBody},
        400: {"model": TranslationErrorBody},
        500: {"model": TranslationErrorBody},
    },
)
async def translate_items(
    request: Request,
    translator: TranslationService = Depends(get_translation_service),
) -> JSONResponse:
    """Return translated items keyed by locale; unsupported locales are omitted."""
    payload = decode_request_body(await request.body())
    response = await translator.respond(payload)
    return JSONResponse(status_code=response.status_code, content=response.body)
