"""
Helpers shared by the route handlers: parameter defaults, permissive
parsing, required-field checks and the success envelope.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel

from .schemas import SuccessResponse


# Defaults for every optional numeric parameter, keyed by its query name.
PARAM_DEFAULTS: Dict[str, int] = {
    "minConfirmations": 1,
    "maxConfirmations": 9999999,
    "count": 10,
    "skip": 0,
    "verbosity": 1,
    "nblocks": 6,
}


def query_int(name: str, raw: Optional[str]) -> int:
    """
    Parse an integer query parameter.

    Absent, empty and unparseable values fall back to PARAM_DEFAULTS[name].
    """
    if raw is None or not raw.strip():
        return PARAM_DEFAULTS[name]
    try:
        return int(raw.strip())
    except ValueError:
        return PARAM_DEFAULTS[name]


def query_bool(raw: Optional[str]) -> bool:
    """True only for "true" or "1"."""
    return raw is not None and raw.strip().lower() in ("true", "1")


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(message: str, *values: Any) -> None:
    """Reject the request with 400 if any value is missing."""
    if any(is_missing(v) for v in values):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def envelope(data: Any) -> SuccessResponse:
    """Wrap a payload in the success envelope."""
    if isinstance(data, BaseModel):
        data = data.model_dump()
    return SuccessResponse(data=data)
