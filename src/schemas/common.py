"""Response envelope shared by every API endpoint."""
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope wrapping every response body.

    Successful calls carry `data`; failures set `success` to false and carry `error`.
    """

    success: bool = True
    data: T | None = None
    error: str | None = None
