"""
API key authentication for the Zcash RPC backend.
"""

import logging
import secrets
from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from .config import get_settings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def require_api_key(api_key: Optional[str] = Security(api_key_header)) -> str:
    """
    Dependency that gates a route behind the static API key.

    - 401 when the header is missing
    - 403 when it does not match
    - 500 when the server has no key configured
    """
    expected = get_settings().api_key
    if not expected:
        logger.error("Rejecting request: API_KEY is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API key is not configured on the server",
        )

    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is required",
        )

    if not secrets.compare_digest(api_key.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
        )

    return api_key
