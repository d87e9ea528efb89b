"""Helpers for rendering failures in the response envelope."""
from collections.abc import Iterable
from typing import Any

from fastapi.responses import JSONResponse

from schemas.common import ApiResponse

# Pydantic prefixes messages raised from validators with this
_VALUE_ERROR_PREFIX = "Value error, "


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """
    Collapse pydantic error entries into one message.

    Each entry renders as "<field>: <message>" (the request location such as
    "body" or "query" is dropped), joined by "; ".
    """
    parts = []
    for error in errors:
        loc = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path")]
        msg = str(error.get("msg", "Invalid value")).removeprefix(_VALUE_ERROR_PREFIX)
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a failure envelope with the given status."""
    body = ApiResponse[None](success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
