"""Domain exceptions.

All catalog-level errors surfaced to callers. A retrieval that raises
any of these leaves the result cache untouched.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Query Errors
# ============================================================================


class InvalidQueryError(DomainError):
    """Raised when query parameters cannot describe a result window."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        """Initialize invalid query error.

        Args:
            field: Name of the offending parameter.
            value: The rejected value.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {field} {value!r}: {reason}",
            details={"field": field, "value": value, "reason": reason},
        )


# ============================================================================
# Catalog Retrieval Errors
# ============================================================================


class CatalogError(DomainError):
    """Base class for errors raised while retrieving catalog data."""

    pass


class NetworkError(CatalogError):
    """Raised when the data source cannot be reached or answers with a failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        """Initialize network error.

        Args:
            message: Description of the failure.
            status_code: HTTP status code, if a response was received.
            url: Requested URL, if known.
        """
        super().__init__(
            message,
            details={"status_code": status_code, "url": url},
        )
        self.status_code = status_code
        self.url = url


class DataFormatError(CatalogError):
    """Raised when a payload does not match the expected shape."""

    def __init__(self, resource: str, reason: str) -> None:
        """Initialize data format error.

        Args:
            resource: Name of the payload (e.g., "categories").
            reason: What was wrong with it.
        """
        super().__init__(
            f"Malformed {resource} payload: {reason}",
            details={"resource": resource, "reason": reason},
        )
        self.resource = resource


class NotFoundError(CatalogError):
    """Raised when a single product lookup has no match."""

    def __init__(self, product_id: int | str) -> None:
        """Initialize not found error.

        Args:
            product_id: The identifier that was looked up.
        """
        super().__init__(
            f"Product {product_id} not found",
            details={"product_id": product_id},
        )
        self.product_id = product_id
