from __future__ import annotations

from fastapi import APIRouter, Depends

from translation_gateway.api.deps import get_locale_catalog
from translation_gateway.schemas.locales import SupportedLocalesResponse
from translation_gateway.services.locale_catalog import LocaleCatalog

router = APIRouter()


@router.get(
    "",
    response_model=SupportedLocalesResponse,
    summary="List locales advertised as translatable.",
)
async def list_supported_locales(
    catalog: LocaleCatalog = Depends(get_locale_catalog),
) -> SupportedLocalesResponse:
    return catalog.to_response()
