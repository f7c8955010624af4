from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from translation_gateway.actions.utils import extract_parameters, string_parameters
from translation_gateway.core.app import configure_logging
from translation_gateway.core.config import AppSettings
from translation_gateway.core.errors import ConfigurationError, TranslationGatewayError
from translation_gateway.schemas.translation import parse_translation_request
from translation_gateway.services.responses import error_response_from
from translation_gateway.services.translation import TranslationService

logger = logging.getLogger(__name__)


async def main(params: dict[str, Any]) -> dict[str, Any]:
    """Action entrypoint: translate the request carried by ``params``."""
    configure_logging(str(params.get("LOG_LEVEL") or "INFO"))
    logger.info("Calling the get translation action")
    logger.debug(string_parameters(params))

    try:
        request = parse_translation_request(extract_parameters(params))
        settings = _load_settings(params)
    except TranslationGatewayError as exc:
        return error_response_from(exc).to_action()

    response = await TranslationService(settings).respond(request)
    logger.info("%s: translation action finished", response.status_code)
    return response.to_action()


def _load_settings(params: dict[str, Any]) -> AppSettings:
    try:
        return AppSettings.from_params(params)
    except PydanticValidationError as exc:
        fields = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
        raise ConfigurationError(
            f"Invalid configuration values: {', '.join(fields)}"
        ) from exc
