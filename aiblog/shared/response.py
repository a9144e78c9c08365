"""
Uniform response envelope.

Every API response, success or error, is wrapped in ApiResponse:
success responses carry ``data``; error responses carry ``message``.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope around an outgoing result.

    Attributes:
        success: Discriminator. True when ``data`` holds the payload.
        data: The payload on success, None on error.
        message: The error message on failure, None on success.
    """

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        """Wrap a successful payload."""
        return cls(success=True, data=data)

    @classmethod
    def error(cls, message: str) -> "ApiResponse[None]":
        """Wrap an error message."""
        return cls(success=False, message=message)
