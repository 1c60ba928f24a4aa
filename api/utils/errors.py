# api/utils/errors.py
"""
Standardized API error responses.

Failures are reported by HTTP status alone: the response body is empty.
The machine-readable code (snake_case) and detail go to the log instead,
so operators can still tell a missing query from a bad pattern.
"""

import logging
from typing import Optional

from flask import Response

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Standard HTTP Error Responses
# -----------------------------------------------------------------------------

def error_response(
    code: str,
    status: int = 400,
    detail: Optional[str] = None,
    headers: Optional[dict] = None,
) -> Response:
    """
    Create an empty-body error response.

    Args:
        code: Machine-readable error code (snake_case), logged only
        status: HTTP status code
        detail: Human-readable explanation, logged only
        headers: Extra response headers

    Returns:
        Flask Response with no body
    """
    message = f"{status} {code}" + (f": {detail}" if detail else "")
    if status >= 500:
        logger.error(message)
    else:
        logger.info(message)
    return Response(status=status, headers=headers)


# Validation (400)
def missing_field(field: str) -> Response:
    """Required query parameter is missing or empty."""
    return error_response(f"{field}_required", 400, f"Missing required parameter: {field}")


def invalid_field(field: str, detail: str = None) -> Response:
    """Query parameter value is unusable."""
    return error_response(f"invalid_{field}", 400, detail)


# Not Found (404)
def not_found(resource: str = "resource", detail: str = None) -> Response:
    """Requested route or resource does not exist."""
    return error_response("not_found", 404, detail or f"{resource} not found")


# Server Error (500)
def server_error(code: str = "internal_error", detail: str = None) -> Response:
    """Internal server error."""
    return error_response(code, 500, detail)


# Service Unavailable (503)
def service_unavailable(code: str, detail: str = None, retry_after: int = 1) -> Response:
    """Temporary condition; the client may retry after the given delay."""
    return error_response(code, 503, detail, headers={"Retry-After": str(retry_after)})
