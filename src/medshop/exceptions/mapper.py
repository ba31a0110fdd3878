import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from .base import (
    BusinessRuleError,
    DatabaseError,
    ErrorSource,
    RepositoryError,
    UnexpectedError,
)
from .error_classifier import classify_constraint, extract_error_details

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_ERROR_THRESHOLD = 50000

# Short summary (`error` field) per origin of a business-rule failure. Only writes
# (the Orders trigger and the purchase procedure) report client errors; a failing
# function is always a server error.
BUSINESS_ERROR_TITLES = {
    ErrorSource.TRIGGER: "Order creation failed",
    ErrorSource.STORED_PROCEDURE: "Operation failed",
}


class ErrorTranslator:
    """
    Turns any exception into an app-level `RepositoryError`.

    Database errors numbered at or above `business_error_threshold` (or 0, which is
    what RAISERROR with a message string reports) were raised on purpose by a trigger
    or procedure and become client errors. Every other database error, and any error
    from a function query, is an infrastructure fault. Non-database exceptions become
    `UnexpectedError`.
    """

    def __init__(self, business_error_threshold: int = DEFAULT_BUSINESS_ERROR_THRESHOLD):
        self.business_error_threshold = business_error_threshold

    def is_business_error(self, number: int | None) -> bool:
        if number is None:
            return False
        return number >= self.business_error_threshold or number == 0

    def translate(self, exc: BaseException, *, source: ErrorSource, action: str | None = None) -> RepositoryError:
        if isinstance(exc, RepositoryError):
            return exc

        details = extract_error_details(exc)

        if details is None:
            logger.error(
                "translator.unexpected",
                exc_info=exc,
                extra={"action": action, "exc_type": type(exc).__name__},
            )
            return UnexpectedError(str(exc) or type(exc).__name__)

        if source in BUSINESS_ERROR_TITLES and self.is_business_error(details.number):
            # Expected client-level outcome: INFO, no stack trace
            logger.info(
                "translator.business_rule",
                extra={
                    "action": action,
                    "source": source.value,
                    "error_number": details.number,
                    "severity": details.severity,
                },
            )
            return BusinessRuleError(
                details.message,
                source=source,
                title=BUSINESS_ERROR_TITLES.get(source),
                number=details.number,
                severity=details.severity,
            )

        logger.error(
            "translator.database_error",
            extra={
                "action": action,
                "source": source.value,
                "error_number": details.number,
                "severity": details.severity,
                "constraint_kind": classify_constraint(details).value,
            },
        )
        return DatabaseError(details.message, number=details.number, severity=details.severity)


# -----------------------
# Async context manager to DRY error handling in services
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, translator: ErrorTranslator, *,
                           source: ErrorSource, action: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.translator, source=ErrorSource.STORED_PROCEDURE, action="purchase"):
            ... routine call + commit ...
    Rolls back on any error and raises the translated app-level exception.
    """
    try:
        yield
    except Exception as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after error", extra={"action": action})

        if isinstance(exc, RepositoryError):
            raise

        raise translator.translate(exc, source=source, action=action) from exc
