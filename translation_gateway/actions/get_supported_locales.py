from __future__ import annotations

import logging
from typing import Any

from translation_gateway.actions.utils import string_parameters
from translation_gateway.api.deps import get_locale_catalog
from translation_gateway.core.app import configure_logging

logger = logging.getLogger(__name__)


async def main(params: dict[str, Any]) -> dict[str, Any]:
    """Action entrypoint returning the locales this deployment can translate into."""
    configure_logging(str(params.get("LOG_LEVEL") or "INFO"))
    logger.info("Calling the get supported locales action")
    logger.debug(string_parameters(params))

    try:
        catalog = await get_locale_catalog()
    except Exception:
        logger.exception("Failed to load the locale catalog")
        return {"statusCode": 500, "body": {"error": "server error"}}

    response = catalog.to_response()
    logger.info("200: returning %d supported locales", len(catalog))
    return {"statusCode": 200, "body": response.model_dump()}
