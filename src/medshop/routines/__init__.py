from sqlalchemy.ext.asyncio import AsyncSession

from .base import StoreRoutines
from .inprocess import InProcessRoutines
from .sqlserver import SqlServerRoutines

ROUTINE_BACKENDS: dict[str, type[StoreRoutines]] = {
    SqlServerRoutines.name: SqlServerRoutines,
    InProcessRoutines.name: InProcessRoutines,
}


def build_routines(backend: str, db: AsyncSession) -> StoreRoutines:
    """Instantiate the routines for a resolved backend name ("sqlserver" or "inprocess")."""
    try:
        return ROUTINE_BACKENDS[backend](db)
    except KeyError:
        raise ValueError(f"Unknown routines backend: {backend!r}") from None


__all__ = [
    "StoreRoutines",
    "SqlServerRoutines",
    "InProcessRoutines",
    "ROUTINE_BACKENDS",
    "build_routines",
]
