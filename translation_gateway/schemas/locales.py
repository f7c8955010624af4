from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SupportedLocale(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Locale tag advertised as translatable.")
    label: str = Field(..., description="Human readable language name.")


class SupportedLocalesResponse(BaseModel):
    locales: list[SupportedLocale] = Field(default_factory=list)
