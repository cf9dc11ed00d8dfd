"""
Application error taxonomy.

Every error raised by the services derives from ``AppError`` and carries the
HTTP status it maps to; ``api.errors`` renders them as JSON.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "error": type(self).__name__,
            "message": self.message,
        }


class ValidationError(AppError):
    """Malformed input. ``errors`` holds one ``{field, constraints}`` entry per bad field."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body

    @classmethod
    def from_pydantic(cls, errors: List[Dict[str, Any]]) -> "ValidationError":
        """Group pydantic error entries by field, keyed by error type."""
        grouped: Dict[str, Dict[str, str]] = {}
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
            field = ".".join(loc) or "body"
            grouped.setdefault(field, {})[err.get("type", "invalid")] = err.get("msg", "")
        return cls(
            errors=[
                {"field": field, "constraints": constraints}
                for field, constraints in grouped.items()
            ]
        )


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidTokenError(UnauthorizedError):
    default_message = "Invalid token"


class ExpiredTokenError(UnauthorizedError):
    default_message = "Token has expired"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"
