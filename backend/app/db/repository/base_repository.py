"""
Base repository pattern implementation

Provides the base repository class with common async operations.
Repositories never open sessions themselves; the caller's unit of work
passes one in.
"""

from abc import ABC
from typing import Any, Dict, Generic, TypeVar, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Generic type variables
ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType")


class BaseRepository(Generic[ModelType, CreateSchemaType], ABC):
    """
    Asynchronous base Repository class

    Generic parameters:
        ModelType: SQLAlchemy model type
        CreateSchemaType: Schema type for create operations
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize Repository

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    async def count(self, session: AsyncSession, filters: Dict[str, Any] = None) -> int:
        """
        Count records matching exact-value filters

        Args:
            session: Asynchronous database session
            filters: column -> value

        Returns:
            Record count
        """
        stmt = select(func.count()).select_from(self.model)
        for key, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, key) == value)
        result = await session.execute(stmt)
        return result.scalar() or 0

    async def create(self, session: AsyncSession, obj_in: CreateSchemaType, **kwargs) -> ModelType:
        """
        Create new record

        Args:
            session: Asynchronous database session
            obj_in: Creation data (Pydantic model or dict)
            **kwargs: Extra column values

        Returns:
            Created model instance
        """
        if hasattr(obj_in, 'model_dump'):
            obj_data = obj_in.model_dump(exclude_unset=True)
        else:
            obj_data = dict(obj_in) if obj_in else {}

        obj_data.update(kwargs)

        db_obj = self.model(**obj_data)
        session.add(db_obj)
        await session.flush()  # Get defaults but don't commit
        await session.refresh(db_obj)
        return db_obj
