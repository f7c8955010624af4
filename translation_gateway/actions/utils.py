from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from translation_gateway.core.config import AppSettings
from translation_gateway.schemas.translation import decode_request_body

_HIDDEN = "<hidden>"
_REQUEST_FIELDS = ("sourceLocale", "targetLocales", "items")


def string_parameters(params: Mapping[str, Any]) -> str:
    """Return a log-ready string of the action parameters.

    The ``authorization`` header and every credential setting are replaced
    with ``<hidden>``.
    """
    sanitized = dict(params)
    headers = dict(params.get("__ow_headers") or {})
    if "authorization" in headers:
        headers["authorization"] = _HIDDEN
    sanitized["__ow_headers"] = headers

    secret_aliases = {
        info.alias
        for name, info in AppSettings.model_fields.items()
        if info.alias and _is_secret_field(name)
    }
    for key in secret_aliases & sanitized.keys():
        sanitized[key] = _HIDDEN
    return json.dumps(sanitized, default=str, ensure_ascii=False)


def _is_secret_field(name: str) -> bool:
    return name.endswith("_api_key")


def extract_parameters(params: Mapping[str, Any]) -> dict[str, Any]:
    """Pull the translation request out of a raw ``__ow_body`` or structured fields."""
    raw_body = params.get("__ow_body")
    if raw_body:
        body = decode_request_body(raw_body)
        return {field: body.get(field) for field in _REQUEST_FIELDS}
    return {field: params.get(field) for field in _REQUEST_FIELDS}
