# oauth_gateway/adapters/outbound/persistence/repositories/base_repository.py (async version)

from typing import Any, Dict, Generic, Optional, Type, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select
import logging

from oauth_gateway.adapters.outbound.persistence.models.base_model import Base
from oauth_gateway.domain.exceptions import DatabaseOperationException

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides the lookups and inserts shared by the OAuth2 repositories,
    with consistent error handling and logging.

    Attributes:
        model: SQLAlchemy model class
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize the repository with an SQLAlchemy model.

        Args:
            model: SQLAlchemy model class associated with this repository
        """
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Get an entity by ID.

        Args:
            db: Async database session
            id: ID of the entity

        Returns:
            Entity found or None if it doesn't exist
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with ID {id}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__}",
                original_error=e
            )

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        """
        Get an entity by the value of a specific field.

        Args:
            db: Async database session
            field_name: Name of the field/column to filter
            value: Value to filter

        Returns:
            Entity found or None if it doesn't exist

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = select(self.model).where(getattr(self.model, field_name) == value)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with {field_name}={value}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__} by {field_name}",
                original_error=e
            )

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any], commit: bool = True) -> ModelType:
        """
        Create a new entity.

        Args:
            db: Async database session
            obj_in: Column values of the new entity
            commit: Commit right away, or only flush to get generated keys

        Returns:
            Newly created entity

        Raises:
            DatabaseOperationException: If a database error occurs
        """
        try:
            db_obj = self.model(**obj_in)

            db.add(db_obj)
            if commit:
                await db.commit()
                await db.refresh(db_obj)
            else:
                await db.flush()

            self.logger.info(f"{self.model.__name__} created with ID: {db_obj.id}")
            return db_obj

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error creating {self.model.__name__}",
                original_error=e
            )
