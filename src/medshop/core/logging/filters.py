"""
Logging filters.

- RequestIdFilter: stamps every record with the current request id (contextvar set by
  RequestIDMiddleware), "-" outside of a request, so `%(request_id)s` never KeyErrors.
- RedactFilter: masks values passed through `extra=` under sensitive keys.

A ContextVar (not threading.local) keeps the id correct across awaits and between
concurrent requests served by the same thread.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """Set the request id in the current context and return the token for reset_request_id()."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees `record.request_id`: an explicit `extra={"request_id": ...}` wins,
    then the contextvar, then the sentinel "-". Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "db_password", "secret", "token", "access_token", "authorization", "connection_string"}
    REDACTED = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.REDACTED
        return True
