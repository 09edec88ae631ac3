"""Repository layer for PhoneCall-Graph.

Implements the Generic Repository pattern on top of a SQLAlchemy session.
Transactions are owned by the Unit of Work, never by a repository.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


class GenericRepository(Generic[T]):
    """Generic repository implementing common CRUD operations.

    This base class provides reusable database operations that can be
    extended by specific repositories for custom queries.
    """

    def __init__(self, session: Session, model_cls: type[T]):
        """Initialize repository with a session and model class.

        Args:
            session: SQLAlchemy session for database operations.
            model_cls: The SQLAlchemy model class this repository manages.
        """
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        """Add a new entity to the session.

        Args:
            entity: The entity instance to add.

        Returns:
            The added entity.
        """
        self.session.add(entity)
        return entity

    def add_all(self, entities: list[T]) -> list[T]:
        """Add multiple entities to the session.

        Args:
            entities: List of entity instances to add.

        Returns:
            The added entities.
        """
        self.session.add_all(entities)
        return entities

    def get_by_id(self, _id: Any) -> T | None:
        """Retrieve an entity by its primary key.

        Args:
            _id: The primary key value.

        Returns:
            The entity if found, None otherwise.
        """
        return self.session.get(self.model_cls, _id)

    def get_all(self, limit: int | None = None, offset: int | None = None) -> list[T]:
        """Retrieve all entities of this type ordered by primary key.

        Args:
            limit: Maximum number of results to return.
            offset: Number of results to skip.

        Returns:
            List of all entities.
        """
        stmt = select(self.model_cls).order_by(self.model_cls.id)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def update(self, entity: T) -> T:
        """Merge a detached entity back into the session."""
        return self.session.merge(entity)

    def delete(self, entity: T) -> None:
        self.session.delete(entity)

    def delete_by_id(self, _id: Any) -> bool:
        """Delete an entity by its primary key.

        Returns:
            True if entity was deleted, False if not found.
        """
        entity = self.get_by_id(_id)
        if entity:
            self.delete(entity)
            return True
        return False

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model_cls)
        return self.session.execute(stmt).scalar_one()

    def exists(self, _id: Any) -> bool:
        return self.get_by_id(_id) is not None

