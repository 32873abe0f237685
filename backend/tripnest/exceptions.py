"""
TripNest Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions raised by the persistence adapter.
How:   Each exception carries a message, an optional context dict and an
       `ErrorKind`. A single handler registered in main.py maps the kind to
       an HTTP status, so routes never build error responses themselves.
Who:   Raised by TouristSpotService and the route helpers; caught at the
       HTTP boundary.

Exception Hierarchy:
    TripNestError (base, INTERNAL)
    ├── BadRequestError          → 400 (missing required parameter)
    ├── NotFoundError            → 404 (no matching document / nothing modified)
    ├── InternalError            → 500
    │   ├── DatabaseError        → 500 (store unreachable or rejected the call)
    │   ├── InvalidIdentifierError → 500 (path id is not an ObjectId)
    │   └── MalformedBodyError   → 500 (body is not a JSON object)
    └── ConfigurationError       (startup only, never reaches HTTP)
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Outcome category of a failed operation, valued by its HTTP status."""

    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL = 500

    @property
    def status_code(self) -> int:
        return self.value


class TripNestError(Exception):
    """
    Base exception for all TripNest application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
        kind:     ErrorKind used to pick the HTTP status
        code:     Machine-readable error code for the response body
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(TripNestError):
    """
    Raised when a required request parameter is missing.

    When:    GET /my-list/<email> where the email is blank after trimming.
    HTTP:    400 Bad Request
    """

    kind = ErrorKind.BAD_REQUEST
    code = "bad_request"

    def __init__(
        self,
        message: str = "A required parameter is missing",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TripNestError):
    """
    Raised when no document matches the request.

    When:    Unknown id on get/update/delete, an update that modified nothing,
             or an email with no tourist spots.
    HTTP:    404 Not Found
    """

    kind = ErrorKind.NOT_FOUND
    code = "not_found"

    def __init__(
        self,
        message: str = "Tourist spot not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(TripNestError):
    """Base for failures the client cannot fix. HTTP 500."""

    kind = ErrorKind.INTERNAL
    code = "server_error"


class DatabaseError(InternalError):
    """
    Raised when a store operation fails.

    Security Note:
        The message returned to the client is the operation's generic message
        ("Error fetching tourist spots"). Driver details go into `context` and
        are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidIdentifierError(InternalError):
    """
    Raised when a path id cannot be parsed as an ObjectId.

    HTTP:    500, matching the behaviour of the service this API replaces,
             where constructing the ObjectId threw inside the route.
    """

    def __init__(
        self,
        message: str = "Error fetching tourist spot",
        identifier: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if identifier is not None:
            ctx["identifier"] = identifier
        super().__init__(message=message, context=ctx)
        self.identifier = identifier


class MalformedBodyError(InternalError):
    """Raised when a request body is not valid JSON or not a JSON object."""

    def __init__(
        self,
        message: str = "Request body must be a JSON object",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(TripNestError):
    """
    Raised at startup when required settings are missing.

    Fatal: the CLI exits with status 1 and the lifespan aborts startup.
    """

    def __init__(
        self,
        message: str = "Configuration validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
