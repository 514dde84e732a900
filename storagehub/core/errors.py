"""
Exception types shared by the upload services and the HTTP layer.

Every error carries the HTTP status it maps to, so routers can let them
propagate and the application-level handler renders the JSON body.
"""

from typing import Any, Dict, Optional


class StorageHubError(Exception):
    """
    Base exception for storagehub errors.

    Attributes:
        message: Human-readable error message
        error_code: Short code for categorization, defaults to the class name
        details: Additional context for diagnostics
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        body: Dict[str, Any] = {"error": self.message, "code": self.error_code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(StorageHubError):
    """Raised when required fields are missing or malformed."""

    status_code = 400


class NotFoundError(StorageHubError):
    """Raised when a referenced file or folder does not exist for the owner."""

    status_code = 404


class DependencyError(StorageHubError):
    """Raised when the metadata store or the object store is unreachable or misconfigured."""

    status_code = 500


class MetadataStoreError(DependencyError):
    pass


class CredentialError(DependencyError):
    """Raised when a signed write URL (or a folder marker) cannot be produced."""


class ConflictRecoverable(StorageHubError):
    """
    Raised internally when a concurrent request created the same folder first.

    The folder directory catches it and re-reads; it never reaches a handler.
    """

    status_code = 409
