"""API helper utilities."""
from api.helpers.errors import error_response, format_validation_errors

__all__ = [
    "error_response",
    "format_validation_errors",
]
