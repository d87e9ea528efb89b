"""
Mock authentication.

Requests identify their user through a header (X-User-Id by default). The value is
trusted as-is; there is no token verification.
"""
from fastapi import Depends, Request

from core.config import Settings, get_settings
from services.exceptions import AuthenticationError


def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Read the user id from the configured request header.

    Raises:
        AuthenticationError: If the header is missing or blank.
    """
    user_id = request.headers.get(settings.user_id_header, "").strip()
    if not user_id:
        raise AuthenticationError("Unauthorized")
    return user_id
