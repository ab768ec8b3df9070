"""
Ticketing HTTP API - Public API
===============================
"""

from core.http_api.contracts import (
    CALLER_HEADER,
    HttpApiErrorBody,
    HttpApiResponse,
)
from core.http_api.errors import (
    error_response,
    map_rejection_reason,
    rejection_response,
    rejection_status,
    success_response,
)

__all__ = [
    "CALLER_HEADER",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "error_response",
    "map_rejection_reason",
    "rejection_response",
    "rejection_status",
    "success_response",
]
