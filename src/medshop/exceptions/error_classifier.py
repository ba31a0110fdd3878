import logging
import re
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Errors raised by in-process routines
# =================================================================================================================


class RaisedDatabaseError(Exception):
    """
    Error signalled the way RAISERROR does on SQL Server: a user-defined number
    (>= 50000 for application rules), a message and a severity class.

    The in-process routines raise this so their failures follow exactly the same
    translation path as the errors coming back from the real procedure/trigger.
    """

    def __init__(self, number: int, message: str, severity: int = 16, state: int = 1):
        super().__init__(message)
        self.number = number
        self.message = message
        self.severity = severity
        self.state = state

    def __repr__(self) -> str:
        return f"RaisedDatabaseError(number={self.number!r}, message={self.message!r}, severity={self.severity!r})"


@dataclass(frozen=True)
class DatabaseErrorDetails:
    """Driver-independent view of a database error."""
    number: int | None
    message: str
    severity: int | None = None


# =================================================================================================================
# Driver-specific extraction
# =================================================================================================================

# pyodbc: "[42000] [Microsoft][ODBC Driver 18 for SQL Server][SQL Server]Insufficient stock (50004) (SQLExecDirectW)"
_ODBC_NUMBER_RE = re.compile(r"\((?P<number>\d+)\)\s*\(SQL\w+\)")
_ODBC_PREFIX = "[SQL Server]"

# pymssql: "... DB-Lib error message 20018, severity 16: ..."
_PYMSSQL_SEVERITY_RE = re.compile(r"severity (?P<severity>\d+)", flags=re.IGNORECASE)


def _as_text(value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _from_pymssql(orig) -> DatabaseErrorDetails | None:
    number = getattr(orig, "number", None)
    if isinstance(number, int):
        message = _as_text(getattr(orig, "text", None) or getattr(orig, "message", None) or orig)
        return DatabaseErrorDetails(number, message.strip(), getattr(orig, "severity", None))

    args = getattr(orig, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        message = _as_text(args[1])
        m = _PYMSSQL_SEVERITY_RE.search(message)
        severity = int(m.group("severity")) if m else None
        # DB-Lib appends its own diagnostics after the first line
        return DatabaseErrorDetails(args[0], message.split("DB-Lib error message")[0].strip(), severity)

    return None


def _from_pyodbc(orig) -> DatabaseErrorDetails | None:
    args = getattr(orig, "args", ())
    raw = _as_text(args[1]) if len(args) >= 2 else _as_text(orig)
    m = _ODBC_NUMBER_RE.search(raw)
    if not m:
        return None

    message = raw[:m.start()]
    if _ODBC_PREFIX in message:
        message = message.rsplit(_ODBC_PREFIX, 1)[1]
    return DatabaseErrorDetails(int(m.group("number")), message.strip())


def _from_sqlite(orig) -> DatabaseErrorDetails | None:
    number = getattr(orig, "sqlite_errorcode", None)
    if number is None:
        return None
    return DatabaseErrorDetails(number, _as_text(orig))


def extract_error_details(exc: BaseException) -> DatabaseErrorDetails | None:
    """
    Best-effort extraction of (number, message, severity) from a database error.

    Returns None when `exc` is not a database error at all. A database error whose
    driver does not expose a number comes back with `number=None`.
    """
    if isinstance(exc, RaisedDatabaseError):
        return DatabaseErrorDetails(exc.number, exc.message, exc.severity)

    if not isinstance(exc, DBAPIError):
        return None

    orig = exc.orig
    if isinstance(orig, RaisedDatabaseError):
        return DatabaseErrorDetails(orig.number, orig.message, orig.severity)
    if orig is None:
        return DatabaseErrorDetails(None, str(exc))

    for extractor in (_from_pymssql, _from_pyodbc, _from_sqlite):
        details = extractor(orig)
        if details is not None:
            return details

    logger.debug("Database error without a vendor number", extra={"orig_repr": repr(orig)})
    return DatabaseErrorDetails(None, _as_text(orig))


# =================================================================================================================
# Constraint classification (diagnostics only)
# =================================================================================================================

class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://learn.microsoft.com/sql/relational-databases/errors-events/database-engine-events-and-errors
SQLSERVER_NUMBER_MAP = {
    2627: ConstraintKind.UNIQUE,
    2601: ConstraintKind.UNIQUE,
    515: ConstraintKind.NOT_NULL,
}

# 547 covers both FOREIGN KEY and CHECK conflicts; the message tells them apart
SQLSERVER_CONSTRAINT_CONFLICT = 547

# https://www.sqlite.org/rescode.html (extended result codes)
SQLITE_NUMBER_MAP = {
    2067: ConstraintKind.UNIQUE,
    1555: ConstraintKind.UNIQUE,
    1299: ConstraintKind.NOT_NULL,
    787: ConstraintKind.FOREIGN_KEY,
    275: ConstraintKind.CHECK,
}


def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _classify_from_generic_message(msg: str) -> ConstraintKind:
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique key", "duplicate"]):
        return ConstraintKind.UNIQUE

    if _match_any(normalized, ["not null constraint", "not null", "cannot insert the value null"]):
        return ConstraintKind.NOT_NULL

    if _match_any(normalized, ["foreign key constraint", "foreign key"]):
        return ConstraintKind.FOREIGN_KEY

    if _match_any(normalized, ["check constraint", "check failed"]):
        return ConstraintKind.CHECK

    return ConstraintKind.UNKNOWN


def classify_constraint(details: DatabaseErrorDetails) -> ConstraintKind:
    """
    Label a database error with the kind of constraint it violated, if any.
    Used to enrich infrastructure-error logs; never changes the HTTP outcome.
    """
    if details.number == SQLSERVER_CONSTRAINT_CONFLICT:
        if "foreign key" in details.message.lower():
            return ConstraintKind.FOREIGN_KEY
        return ConstraintKind.CHECK

    if details.number in SQLSERVER_NUMBER_MAP:
        return SQLSERVER_NUMBER_MAP[details.number]

    if details.number in SQLITE_NUMBER_MAP:
        return SQLITE_NUMBER_MAP[details.number]

    return _classify_from_generic_message(details.message or "")
