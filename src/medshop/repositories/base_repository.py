"""
Base repository class providing the read operations shared by every entity.

Writes in this service go through the store routines (see `medshop.routines`), so
repositories only read. Each method accepts loader options so concrete
repositories decide how deep the returned graph is.
"""
import logging
import time
from typing import Generic, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from medshop.database.base import Base
from medshop.exceptions.base import DatabaseError, NotFoundError
from medshop.exceptions.error_classifier import extract_error_details

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common read operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. `Product`.
            db: The async database session injected per request.
        """
        self.model = model
        self.db = db

    def _read_failed(self, exc: SQLAlchemyError, operation: str) -> DatabaseError:
        details = extract_error_details(exc)
        logger.error(
            "repo.read.failed",
            exc_info=exc,
            extra={"model": self.model.__name__, "operation": operation},
        )
        if details is None:
            return DatabaseError(f"Failed to retrieve {self.model.__name__}")
        return DatabaseError(details.message, number=details.number, severity=details.severity)

    # =================================================================================================================
    # Single entity
    # =================================================================================================================

    async def get_by_id(
        self, entity_id: int, *options: ORMOption, populate_existing: bool = True
    ) -> ModelType | None:
        """
        Get an entity by its primary key, eager-loading `options`.

        `populate_existing` refreshes instances already in the identity map; it applies
        to every nested load too, so graphs that reach the same rows twice turn it off.

        Returns:
            The entity if found, otherwise None

        Raises:
            DatabaseError: If the query itself fails.
        """
        query = (
            select(self.model)
            .where(self.model.id == entity_id)
            .options(*options)
            .execution_options(populate_existing=populate_existing)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._read_failed(e, "get_by_id") from e

        entity = result.scalar_one_or_none()
        logger.debug(
            "repo.get.result",
            extra={"model": self.model.__name__, "id": entity_id, "found": entity is not None},
        )
        return entity

    async def get_by_id_or_raise(
        self, entity_id: int, *options: ORMOption, populate_existing: bool = True
    ) -> ModelType:
        """
        Get an entity by its primary key or raise NotFoundError.

        The message embeds the requested id, e.g. "Product with ID 999999 not found".
        """
        entity = await self.get_by_id(entity_id, *options, populate_existing=populate_existing)

        if entity is None:
            logger.info("repo.get.not_found", extra={"model": self.model.__name__, "id": entity_id})
            raise NotFoundError(f"{self.model.__name__} with ID {entity_id} not found")

        return entity

    # =================================================================================================================
    # Multiple entities
    # =================================================================================================================

    async def get_all(self, *options: ORMOption) -> list[ModelType]:
        """
        Get every entity, ordered by primary key so repeated calls return identical lists.
        """
        start = time.perf_counter()
        query = (
            select(self.model)
            .options(*options)
            .order_by(self.model.id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._read_failed(e, "get_all") from e

        entities = list(result.scalars().all())
        logger.debug(
            "repo.get_all.success",
            extra={
                "model": self.model.__name__,
                "count": len(entities),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entities
