"""
Shared error handling package.

Centralizes the error catalog and error-to-HTTP mapping so that
business errors are consistently translated into API responses.
"""

from aiblog.shared.errors.codes import ErrorCode, lookup
from aiblog.shared.errors.exceptions import BusinessError

__all__ = ["BusinessError", "ErrorCode", "lookup"]
