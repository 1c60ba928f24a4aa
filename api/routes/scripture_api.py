# routes/scripture_api.py
"""
HTTP endpoints for scripture lookup.

Provides:
- GET /refs?q=...          Resolve free-text references
- GET /search?q=...&p=N    Regex search over verse text, 10 rows per page
- GET /daily               Verse of the day

Successful responses are JSON objects; failures are a bare status code.
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from services.scripture import InvalidPattern, ScriptureService, validate_pattern
from utils.db import StoreBusy, StoreUnavailable
from utils.errors import (
    invalid_field,
    missing_field,
    server_error,
    service_unavailable,
)

logger = logging.getLogger(__name__)

scripture_bp = Blueprint("scripture_api", __name__)

EXTENSION_KEY = "scripture_service"


def get_service() -> ScriptureService:
    """Get or create the app's ScriptureService instance."""
    service = current_app.extensions.get(EXTENSION_KEY)
    if service is None:
        service = ScriptureService()
        current_app.extensions[EXTENSION_KEY] = service
    return service


def success_response(payload: dict):
    """JSON response with the CORS headers every success carries."""
    response = jsonify(payload)
    response.headers["Access-Control-Allow-Methods"] = "GET"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


def store_failure(e: Exception):
    """Map a store exception to the matching status response."""
    if isinstance(e, StoreBusy):
        return service_unavailable("store_busy", str(e))
    if isinstance(e, StoreUnavailable):
        return server_error("store_unavailable", str(e))
    logger.exception("Store query failed")
    return server_error("store_query_failed", str(e))


# =============================================================================
# Lookup Endpoints
# =============================================================================

@scripture_bp.get("/refs")
def lookup_references():
    """
    Resolve scripture references.

    Query params:
        q: Reference text (required) e.g., "Gen 1:1-3, Rom 8"

    Returns:
        {
            "results": [
                {
                    "reference": {"title": "Genesis", "alt": "Gen"},
                    "texts": [[{"book_id": 1, "chapter": 1, "verse": 1, "text": "..."}, ...]]
                }
            ]
        }
    """
    query = request.args.get("q")
    if not query:
        return missing_field("q")

    try:
        results = get_service().lookup(query)
    except (StoreBusy, StoreUnavailable, SQLAlchemyError) as e:
        return store_failure(e)

    return success_response({"results": [r.to_dict() for r in results]})


@scripture_bp.get("/search")
def search_text():
    """
    Search verse text.

    Query params:
        q: Regular expression, case-insensitive (required)
        p: Page number (optional, default 1)

    Returns:
        {
            "meta": {"text": "love", "page": 1, "total": 2, "count": 15},
            "results": [[{"book_id": 1, "text": "...", "chapter": 1, "verse": 1,
                          "book_name": "...", "book_alt": "..."}, ...]]
        }
    """
    query = request.args.get("q")
    if not query:
        return missing_field("q")

    try:
        validate_pattern(query)
    except InvalidPattern as e:
        return invalid_field("q", str(e))

    page = request.args.get("p", 1, type=int)

    try:
        result = get_service().search(query, page)
    except (StoreBusy, StoreUnavailable, SQLAlchemyError) as e:
        return store_failure(e)

    return success_response(result.to_dict())


@scripture_bp.get("/daily")
def daily_reading():
    """
    Verse of the day.

    Returns:
        {"results": [...same objects as /refs...]}
    """
    try:
        results = get_service().daily()
    except (StoreBusy, StoreUnavailable, SQLAlchemyError) as e:
        return store_failure(e)

    return success_response({"results": [r.to_dict() for r in results]})
