"""
Bookworm Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the few errors the API reports on
       purpose.
How:   Each exception carries a short, client-safe message and an optional
       context dict. Global handlers (registered in main.py) turn business-rule
       errors into HTTP 400 responses.

Exception Hierarchy:
    BookwormError (base)
    ├── BusinessRuleError        → 400 Bad Request
    │   ├── AlreadyExistsError   (duplicate email / genre name)
    │   ├── UserNotFoundError    (login with unknown email)
    │   ├── InvalidPasswordError (login with wrong password)
    │   └── MissingFieldError    (presence check failed)
    └── DatabaseError            → startup abort (store unreachable)

Anything else raised while handling a request, including a malformed
ObjectId from the store driver, is not caught per route and ends up in the
catch-all 500 handler.
"""

from typing import Any, Dict, Optional


class BookwormError(Exception):
    """
    Base exception for all Bookworm application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BusinessRuleError(BookwormError):
    """
    Raised by a repository when a request breaks one of the checked rules.

    HTTP:    400 Bad Request, body {"message": ..., "request_id": ...}
    """


class AlreadyExistsError(BusinessRuleError):
    """A user with the same email, or a genre with the same name, is stored."""

    def __init__(
        self,
        resource: str = "Resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=f"{resource} already exists", context=ctx)
        self.resource = resource


class UserNotFoundError(BusinessRuleError):
    """Login was attempted for an email that has no stored user."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="User not found", context=context)


class InvalidPasswordError(BusinessRuleError):
    """The supplied password does not verify against the stored hash."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid password", context=context)


class MissingFieldError(BusinessRuleError):
    """A field the operation cannot run without is absent from the payload."""

    def __init__(self, field: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["field"] = field
        super().__init__(message=f"{field} is required", context=ctx)
        self.field = field


class DatabaseError(BookwormError):
    """
    Raised when the document store cannot be reached.

    When:    The startup ping fails. The lifespan handler logs it and lets it
             propagate, which aborts the process.
    """

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
