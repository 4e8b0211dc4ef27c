"""Domain errors raised by services and converted to JSON at the request boundary.

Each error is an ``HTTPException`` so it can be raised from services the same
way they raise plain HTTP errors; the handlers in ``src.main`` render every
one of them as ``{"error": <message>}``.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """A required field is missing or empty."""

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateError(HTTPException):
    """A unique value (email, category name) is already taken."""

    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    """The record is still referenced and cannot be removed."""

    def __init__(self, detail: str = "Resource is in use"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthError(HTTPException):
    """Missing, invalid or expired token, or wrong credentials."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Authenticated, but not allowed to perform the action."""

    def __init__(self, detail: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class MediaError(HTTPException):
    """Rejected upload: wrong content type or payload too large."""

    def __init__(self, detail: str, status_code: int = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE):
        super().__init__(status_code=status_code, detail=detail)

    @classmethod
    def unsupported_type(cls, content_type: str | None) -> "MediaError":
        return cls(f"Only image files are allowed (got {content_type or 'unknown'})")

    @classmethod
    def too_large(cls, max_bytes: int) -> "MediaError":
        return cls(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
            status_code=413,  # Content Too Large
        )


class StoreError(HTTPException):
    """The underlying database rejected or failed an operation."""

    def __init__(self, detail: str = "Database error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def format_validation_errors(errors: list[dict], skip_loc: int = 0) -> str:
    """Join pydantic error entries into one "field: message" string.

    ``skip_loc`` drops leading location parts such as FastAPI's "body".
    """
    messages = []
    for error in errors:
        field = ".".join(str(part) for part in error["loc"][skip_loc:])
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(messages) or "Invalid request"
