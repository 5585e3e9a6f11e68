"""
Record Shop Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the catalog and account flows.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by validators, repositories, services and the auth dependency;
       caught by the handlers in main.py.

Exception Hierarchy:
    RecordShopError (base)
    ├── ValidationError          → 400 Bad Request
    │   └── FieldValidationError   (every broken field of one payload at once)
    │       ├── RecordValidationError      (record create/update body)
    │       └── CredentialValidationError  (signup email/password)
    ├── AuthenticationError      → 401 Unauthorized (bad credentials)
    ├── UnauthorizedError        → 401 Unauthorized (missing/invalid token)
    ├── NotFoundError            → 404 Not Found
    ├── DuplicateError           → 409 Conflict
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Mapping, Optional


class RecordShopError(Exception):
    """
    Base exception for all Record Shop application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only validation context is returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RecordShopError):
    """
    Raised when client input fails a business rule.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "email: email is required.",
            "details": {"fields": {"email": "email is required."}}
        }
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


class FieldValidationError(ValidationError):
    """
    Aggregate of every field violation found in one payload.

    `errors` maps field name → message in the order the fields were checked.
    `message` holds one "<field>: <message>" line per violation.
    """

    def __init__(self, errors: Mapping[str, str]):
        self.errors: Dict[str, str] = dict(errors)
        message = "\n".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(message=message, context={"fields": dict(self.errors)})


class RecordValidationError(FieldValidationError):
    """Raised by RecordValidator for an invalid record create/update body."""


class CredentialValidationError(FieldValidationError):
    """Raised on signup when the email or password breaks the account rules."""


class AuthenticationError(RecordShopError):
    """Raised when login credentials do not match a stored user."""

    def __init__(
        self,
        message: str = "Invalid email or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(RecordShopError):
    """
    Raised by the authenticated-principal dependency.

    When:    No `token` cookie, bad signature, expired token, or missing claims.
    HTTP:    401 Unauthorized, before any service code runs.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(RecordShopError):
    """
    Raised when a mutation targets a row that does not exist.

    When:    UPDATE or DELETE affected zero rows. SQLAlchemy reports that as
             a rowcount, not an error, so repositories check it explicitly.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DuplicateError(RecordShopError):
    """Raised when a unique value (e.g. a user's email) is already taken."""

    def __init__(
        self,
        field: str,
        value: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["field"] = field
        super().__init__(message=f"{field} '{value}' is already registered", context=ctx)
        self.field = field


class DatabaseError(RecordShopError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    exception type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
