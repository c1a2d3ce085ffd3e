"""
Scholarship Portal Backend — Custom Exception Hierarchy
========================================================

What:  Application-specific exceptions for different error scenarios.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    ScholarshipPortalError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── DatabaseError            → 500 Internal Server Error
    ├── PaymentServiceError      → 503 Service Unavailable
    └── CircuitBreakerOpenError  → 503 Service Unavailable (circuit open)
"""

from typing import Any, Dict, Optional


class ScholarshipPortalError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ScholarshipPortalError):
    """
    Raised when client input is rejected.

    When:    The payment gateway refuses the amount, a body field is unusable.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ScholarshipPortalError):
    """
    Raised when a requested document does not exist.

    When:    Deleting or patching an unknown id, role lookup for an unknown email.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that into
    this exception so routes stay free of status-code logic.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(ScholarshipPortalError):
    """
    Raised when a write violates a uniqueness constraint.

    When:    Two concurrent signups with the same email both pass the
             duplicate check; the unique index rejects the second insert.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The document conflicts with an existing one",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ScholarshipPortalError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Details
    (statement, constraint name) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PaymentServiceError(ScholarshipPortalError):
    """
    Raised when the payment gateway cannot create a payment intent.

    When:    Stripe unreachable after retries, gateway not configured,
             or Stripe returned a non-client error.
    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "Payment service is temporarily unavailable",
        retry_after: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if retry_after:
            ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class CircuitBreakerOpenError(ScholarshipPortalError):
    """
    Raised when the payment gateway circuit breaker is OPEN.

    How circuit breaker works:
        CLOSED (normal) → failures increment counter
        → After N failures → OPEN (reject all calls for the recovery window)
        → After the window → HALF-OPEN (allow one test call)
        → If test succeeds → CLOSED
        → If test fails → OPEN again
    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        recovery_time: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Payment service is temporarily unavailable due to repeated failures. "
            f"Please retry in approximately {recovery_time} seconds."
        )
        ctx = context or {}
        ctx["recovery_time"] = recovery_time
        super().__init__(message=message, context=ctx)
        self.recovery_time = recovery_time
