"""
Shared CRUD Service Base

Each resource service wraps one ``AsyncSession`` (one per request) and
follows the same protocol:

    Create: bind -> referenced rows exist -> uniqueness -> persist -> reload
    Read:   look up -> NotFoundError
    Update: look up -> uniqueness excluding self -> partial merge -> persist -> reload
    Delete: look up -> count dependents -> ConflictError -> delete

Uniqueness is pre-checked with ``exists()`` for a readable error and is also
enforced by storage constraints; ``commit()`` turns a constraint violation
into ``ConflictError`` so two concurrent writers cannot both succeed.
"""

import logging
from typing import Any, Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import exists as sql_exists
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wacdo.core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from wacdo.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def changes_from(data: BaseModel) -> dict[str, Any]:
    """Fields the client actually provided, ignoring explicit nulls."""
    return data.model_dump(exclude_unset=True, exclude_none=True)


class CrudService(Generic[ModelT]):
    """
    Base class for resource services.

    Subclasses set ``model``, ``entity_name`` (used in error messages) and
    optionally ``load_options`` (relationship loaders applied to every read).
    """

    model: type
    entity_name: str = "Entity"
    load_options: Sequence[Any] = ()

    def __init__(self, session: AsyncSession):
        self.session = session

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _select(self):
        return select(self.model).options(*self.load_options)

    async def get(self, entity_id: int) -> Optional[ModelT]:
        result = await self.session.execute(
            self._select()
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, entity_id: int) -> ModelT:
        entity = await self.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return entity

    async def list_all(self, *criteria) -> list[ModelT]:
        result = await self.session.execute(
            self._select().where(*criteria).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def exists(self, *criteria) -> bool:
        """True when at least one row matches ``criteria``."""
        result = await self.session.execute(select(sql_exists().where(*criteria)))
        return bool(result.scalar())

    async def count(self, model: type, *criteria) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(model).where(*criteria)
        )
        return result.scalar() or 0

    async def require_reference(self, model: type, entity_id: int, label: str) -> None:
        """A row referenced from the request body must exist (400 otherwise)."""
        if not await self.exists(model.id == entity_id):
            raise ValidationError(f"{label} not found")

    # =========================================================================
    # WRITES
    # =========================================================================

    @staticmethod
    def apply(entity: ModelT, changes: dict[str, Any]) -> ModelT:
        for field, value in changes.items():
            setattr(entity, field, value)
        return entity

    async def commit(self, conflict_message: str) -> None:
        """
        Commit the unit of work.

        Raises:
            ConflictError: A unique or foreign-key constraint rejected the write
            InternalError: Any other storage failure
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"{self.entity_name} write rejected by constraint: {e.orig}")
            raise ConflictError(conflict_message)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"{self.entity_name} write failed: {e}")
            raise InternalError(f"Failed to save {self.entity_name.lower()}")

    async def save(self, entity: ModelT, conflict_message: str) -> ModelT:
        """Add or update ``entity``, commit and return it freshly loaded."""
        self.session.add(entity)
        await self.commit(conflict_message)
        return await self.get_or_404(entity.id)

    async def remove(self, entity: ModelT, conflict_message: str) -> None:
        entity_id = entity.id
        await self.session.delete(entity)
        await self.commit(conflict_message)
        logger.info(f"{self.entity_name} #{entity_id} deleted")
