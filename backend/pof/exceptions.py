"""
Purchase Order Fulfillment API - Exception Hierarchy

Provides structured, typed exceptions with error codes for consistent
error handling across the application.

Usage:
    from pof.exceptions import CoreServiceError, ServiceUnavailableError

    raise CoreServiceError("GET returned HTTP 404", upstream_status=404)
    raise ServiceUnavailableError("Location service", "not configured")
"""
from typing import Any, Dict, Optional


class POFException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "NOT_FOUND")
        status_code: HTTP status code to return
        details: Additional context for debugging
    """

    error_code: str = "POF_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# ===================
# 5xx Integration Errors
# ===================


class IntegrationError(POFException):
    """Raised when an external service integration fails."""

    error_code = "INTEGRATION_ERROR"
    status_code = 502

    def __init__(
        self,
        service: str,
        message: str = "External service error",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["service"] = service
        super().__init__(f"{service}: {message}", details=details)


class CoreServiceError(IntegrationError):
    """
    Raised when the GTT core service answers a read with a non-2xx status
    or cannot be reached at all.

    The upstream status code and body are kept so the API can hand them back
    to the caller as they were received.
    """

    error_code = "CORE_SERVICE_ERROR"

    def __init__(
        self,
        message: str = "Core service request failed",
        *,
        url: Optional[str] = None,
        upstream_status: Optional[int] = None,
        upstream_body: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if url:
            details["url"] = url
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        if upstream_status is not None:
            self.status_code = upstream_status
        super().__init__("GTT core service", message, details=details)


# ===================
# 503 Service Unavailable Errors
# ===================


class ServiceUnavailableError(POFException):
    """Raised when a collaborating service is missing or temporarily unavailable."""

    error_code = "SERVICE_UNAVAILABLE"
    status_code = 503

    def __init__(
        self,
        service: str = "Service",
        message: str = "temporarily unavailable",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["service"] = service
        super().__init__(f"{service} {message}", details=details)
