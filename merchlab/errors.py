# errors.py
"""
Exception types for the MerchLab API.

Every error carries a public ``message`` that is safe to return to the
caller and ``details`` that are only ever written to the operational log.
"""

from typing import Any, Dict, Optional


class MerchLabError(Exception):
    """Base exception for MerchLab errors."""

    kind = "error"

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            message: Human-readable message returned in the response body.
            status_code: HTTP status code for API responses.
            details: Internal context for the log, never sent to the caller.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ValidationError(MerchLabError):
    """Raised when a request is missing or has malformed required fields."""

    kind = "validation"

    def __init__(self, message: str = "Missing required fields", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class UpstreamError(MerchLabError):
    """Raised when the catalog, the generation service or the store fails."""

    kind = "upstream"

    def __init__(self, message: str, error: Optional[Exception] = None, details: Optional[Dict[str, Any]] = None):
        info = dict(details or {})
        if error is not None:
            info.setdefault("error", str(error))
            info.setdefault("error_type", type(error).__name__)
        super().__init__(message=message, status_code=500, details=info)


class StorageError(UpstreamError):
    """Raised when a read or write against the database fails."""

    kind = "storage"

    def __init__(self, operation: str, error: Optional[Exception] = None):
        super().__init__(
            message="Server error",
            error=error,
            details={"operation": operation},
        )
