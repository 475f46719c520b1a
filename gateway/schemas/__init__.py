"""
Pydantic schemas for gateway response bodies.
"""

from gateway.schemas.responses import ErrorResponse, SuccessResponse

__all__ = [
    "ErrorResponse",
    "SuccessResponse",
]
