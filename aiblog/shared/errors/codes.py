"""
Error catalog.

Single source of truth mapping symbolic error identifiers to an HTTP status
code and a client-safe message. The set is closed: new kinds are added here,
never created at runtime.
"""

from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """Closed set of business error kinds.

    Each member carries ``status`` (HTTP status code) and ``message``
    (human-readable, safe to return to clients).
    """

    # Common
    INVALID_INPUT = (400, "Invalid input")
    UNAUTHORIZED = (401, "Authentication is required")

    # Post
    POST_NOT_FOUND = (404, "Post not found")

    # Category
    CATEGORY_NOT_FOUND = (404, "Category not found")
    DUPLICATE_CATEGORY_NAME = (409, "Category name already exists")

    # AI
    AI_API_CALL_FAILED = (502, "AI API call failed")
    AI_ALL_PROVIDERS_FAILED = (502, "All AI providers failed")

    # File
    FILE_UPLOAD_FAILED = (500, "File upload failed")
    FILE_NOT_FOUND = (404, "File not found")

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message


def lookup(identifier: ErrorCode | str) -> tuple[int, str]:
    """Return the ``(status, message)`` pair for an error kind.

    Args:
        identifier: An ErrorCode member or its symbolic name.

    Returns:
        The status code and message registered for the kind.

    Raises:
        KeyError: If a name outside the catalog is given.
    """
    code = identifier if isinstance(identifier, ErrorCode) else ErrorCode[identifier]
    return code.status, code.message
