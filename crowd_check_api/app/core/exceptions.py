"""
Exception hierarchy for the crowd check core.

Not-found is deliberately absent: read operations return ``None`` or an
empty list and the HTTP layer decides whether that means 404.
"""

from typing import Any, Optional


class CrowdCheckError(Exception):
    """Base exception for all crowd check errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(CrowdCheckError, ValueError):
    """Input failed shape or range checks.

    Always raised before the store is touched, so a rejected call
    leaves no partial state behind.
    """

    @classmethod
    def from_pydantic(cls, message: str, exc: Any) -> "ValidationError":
        """Wrap a ``pydantic.ValidationError`` keeping its error list."""
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        return cls(message, {"errors": errors})


class StorageError(CrowdCheckError):
    """The entity store failed for a reason other than bad input."""

    def __init__(self, operation: str, message: str, details: Optional[dict[str, Any]] = None):
        self.operation = operation
        super().__init__(f"[{operation}] {message}", details)
