"""
Business error raised by services, repositories and adapters.

Every modeled failure is a BusinessError wrapping an ErrorCode.
These are mapped to HTTP responses by the centralized error handlers.
No framework imports allowed.
"""

from typing import Optional

from aiblog.shared.errors.codes import ErrorCode


class BusinessError(Exception):
    """Raised when a domain rule is violated.

    Attributes:
        error_code: The catalog entry describing the failure.
        detail: Optional context for operators. Logged, never returned
            to clients.
    """

    def __init__(self, error_code: ErrorCode, detail: Optional[str] = None) -> None:
        self.error_code = error_code
        self.detail = detail
        super().__init__(error_code.message)

    @property
    def status(self) -> int:
        return self.error_code.status

    @property
    def message(self) -> str:
        return self.error_code.message

    def __repr__(self) -> str:
        return f"BusinessError({self.error_code.name}, detail={self.detail!r})"
