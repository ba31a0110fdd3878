"""
Application-level exceptions raised by repositories, routines and services.

Every exception here knows how it should look on the wire (`to_payload()`) and
which HTTP status accompanies it (`http_status()`), so the FastAPI handlers stay tiny.
"""

from enum import Enum
from typing import Iterable


class ErrorSource(str, Enum):
    """Which database object raised an application error."""
    TRIGGER = "Database Trigger"
    STORED_PROCEDURE = "Stored Procedure"
    FUNCTION = "Database Function"


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - title: short summary shown as `error` in the payload
    - fields: optional list of field names related to the error (e.g., ['userId'])
    - error_code: canonical short code (e.g., 'not_found', 'business_rule') used by clients
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "invalid_input": 422,
        "invalid_operation": 400,
        "business_rule": 400,
        "database": 500,
        "unexpected": 500,
        # fallback: default to 400 for general repository errors
    }

    default_title = "Request failed"

    def __init__(self, message: str, *, title: str | None = None,
                 fields: Iterable[str] | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message  # user-friendly message
        self.title = title or self.default_title
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.
        Standard shape:
            {
                "error": "Not found",                       # short summary
                "message": "Product with ID 7 not found",   # human-friendly detail
                "code": "not_found",                        # optional canonical code
                "fields": ["userId"],                       # optional list for client usage
            }
        """
        payload = {"error": self.title, "message": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error.
        - If the exception has an error_code that will be looked up in ERROR_CODE_TO_STATUS.
        - Otherwise default to 400 (Bad Request).
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(RepositoryError):
    default_title = "Not found"

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class InvalidInputError(RepositoryError):
    """Request body / query string failed validation before reaching the data layer."""
    default_title = "Invalid request"

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_input")


class InvalidOperationError(RepositoryError):
    """
    The service layer rejected a routine call on its own (bad argument combination).
    Always a client error, whatever the database would have said.
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, title=message, fields=fields, error_code="invalid_operation")

    def to_payload(self) -> dict:
        payload = {"error": self.message, "code": self.error_code}
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class DatabaseFaultError(RepositoryError):
    """
    Common shape of errors that came back from the database driver.

    - message: the database's own message text
    - number: vendor error number (None when the driver did not expose one)
    - severity: vendor severity class (None when unknown)
    """

    def __init__(self, message: str, *, title: str | None = None, number: int | None = None,
                 severity: int | None = None, error_code: str):
        super().__init__(message, title=title, error_code=error_code)
        self.number = number
        self.severity = severity

    def to_payload(self) -> dict:
        return {
            "error": self.title,
            "message": self.message,
            "errorNumber": self.number,
            "severity": self.severity,
        }


class BusinessRuleError(DatabaseFaultError):
    """A trigger or stored procedure refused the operation on purpose (client error)."""
    default_title = "Operation failed"

    def __init__(self, message: str, *, source: ErrorSource, title: str | None = None,
                 number: int | None = None, severity: int | None = None):
        super().__init__(message, title=title, number=number, severity=severity, error_code="business_rule")
        self.source = source

    @property
    def details(self) -> str:
        return f"Raised on the database server by a {self.source.value.lower()}"

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["source"] = self.source.value
        payload["details"] = self.details
        return payload


class DatabaseError(DatabaseFaultError):
    """Connectivity, constraint, syntax or any other non-business database failure (server error)."""
    default_title = "Database error"

    def __init__(self, message: str, *, title: str | None = None,
                 number: int | None = None, severity: int | None = None):
        super().__init__(message, title=title, number=number, severity=severity, error_code="database")


class UnexpectedError(RepositoryError):
    """Anything that is neither an app-level nor a database error. Carries only its message."""
    default_title = "Unexpected error"

    def __init__(self, message: str):
        super().__init__(message, error_code="unexpected")

    def to_payload(self) -> dict:
        return {"error": self.message}


__all__ = [
    "ErrorSource",
    "RepositoryError",
    "NotFoundError",
    "InvalidInputError",
    "InvalidOperationError",
    "DatabaseFaultError",
    "BusinessRuleError",
    "DatabaseError",
    "UnexpectedError",
]
