"""
Shared error handling for the Server ACL.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for ACL components."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(AccessLayerException):
    """Invalid ACL configuration or assessor declaration."""

    def __init__(self, message: str = "Invalid ACL configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class AssessorError(AccessLayerException):
    """A role assessor failed while checking a role."""

    def __init__(self, role: str, message: str = "Role assessor failed",
                 details: Optional[Dict[str, Any]] = None, code: str = "ASSESSOR_ERROR"):
        self.role = role
        details = dict(details or {})
        details.setdefault("role", role)
        super().__init__(code, f"{role}: {message}", details)


class PopulationError(AssessorError):
    """A role assessor failed while initialising the context."""

    def __init__(self, role: str, priority: int, message: str = "Context initialisation failed",
                 details: Optional[Dict[str, Any]] = None):
        self.priority = priority
        details = dict(details or {})
        details.setdefault("priority", priority)
        super().__init__(role, message, details, code="POPULATION_ERROR")


class AclTimeoutError(AccessLayerException):
    """Population or resolution did not finish in time."""

    def __init__(self, operation: str, timeout: float, details: Optional[Dict[str, Any]] = None):
        self.operation = operation
        self.timeout = timeout
        details = dict(details or {})
        details.update({"operation": operation, "timeout_seconds": timeout})
        super().__init__("TIMEOUT_ERROR", f"{operation} timed out after {timeout}s", details)


class AuthorizationError(AccessLayerException):
    """Access denied at the framework boundary."""

    def __init__(self, message: str = "Authorization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHORIZATION_ERROR", message, details)
