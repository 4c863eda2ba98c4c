"""Project-wide DRF exception handler.

Wraps DRF's default handler so every error payload carries a machine readable
``code`` next to ``detail``. Lifecycle errors define their own codes
(``invalid_state``, ``missing_field``, ...), which lets clients tell a
validation problem apart from a store failure.
"""

import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    code = getattr(exc, "default_code", "error")
    detail = getattr(exc, "detail", None)
    if hasattr(detail, "code") and detail.code:
        code = detail.code
    if isinstance(response.data, dict) and "detail" in response.data:
        response.data["code"] = code

    if response.status_code >= 500:
        view = context.get("view")
        logger.error(
            "api_error status=%s code=%s view=%s",
            response.status_code,
            code,
            type(view).__name__ if view else "",
            exc_info=exc,
        )
    return response
