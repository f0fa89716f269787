"""Custom exceptions and helpers for consistent error payloads."""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class RosterValidationError(AppError):
    """Raised when a customer roster fails boundary validation."""

    def __init__(self, message: str = "Invalid customer roster", errors: Optional[List[dict]] = None):
        super().__init__(message, status_code=422)
        self.errors = errors or []


class TriggerAlreadyProcessedError(AppError):
    """Raised when a campaign is requested for a trigger that was already handled."""

    def __init__(self, message: str = "Trigger already processed"):
        super().__init__(message, status_code=409)


def to_payload(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a JSON-serializable dict for the caller."""
    payload: Dict[str, Any] = {
        "status": "error",
        "status_code": error.status_code,
        "message": str(error),
    }
    errors = getattr(error, "errors", None)
    if errors:
        payload["errors"] = errors
    return payload
