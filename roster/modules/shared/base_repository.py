"""
Base Repository Pattern

Purpose
-------
Provides a type-safe, generic repository abstraction for database operations
following SQLAlchemy 2.0 conventions. SQL-backed repositories build on it to
get consistent query helpers and structured debug logging.

Design Notes
------------
This base repository provides:
- Type-safe lookups by primary key or conditions
- Ordered multi-row queries
- Existence/counting utilities
- Aggregate helpers (max over a column)
- Full structured logging

What this class does NOT do:
- Manage transactions (the concrete repository opens one per operation)
- Contain business logic
- Convert rows into domain models

Usage
-----
    from roster.modules.shared import BaseRepository

    class CharacterRowRepository(BaseRepository[CharacterRow]):
        def find_masters(self, session: Session) -> list[CharacterRow]:
            return self.find_many_where(
                session,
                CharacterRow.level >= 90,
                order_by=CharacterRow.position,
            )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select

if TYPE_CHECKING:
    from logging import Logger

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import InstrumentedAttribute, Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository for type-safe database operations.

    Type Parameters:
        T: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model_class: Type[T], logger: Logger) -> None:
        """
        Initialize repository with model class and logger.

        Args:
            model_class: The SQLAlchemy model class
            logger: Structured logger instance
        """
        self.model_class = model_class
        self.log = logger

    def get(self, session: Session, id_value: Any) -> Optional[T]:
        """
        Get a single record by primary key.

        Args:
            session: Database session
            id_value: Primary key value

        Returns:
            Model instance or None if not found
        """
        instance = session.get(self.model_class, id_value)

        self.log.debug(
            f"Repository.get: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
                "id": id_value,
                "found": instance is not None,
            },
        )

        return instance

    def find_many_where(
        self,
        session: Session,
        *conditions: ColumnElement[bool],
        order_by: Optional[InstrumentedAttribute] = None,
        limit: Optional[int] = None,
    ) -> List[T]:
        """
        Find multiple records matching conditions.

        Args:
            session: Database session
            *conditions: SQLAlchemy filter conditions
            order_by: Optional column to order by
            limit: Optional maximum number of results

        Returns:
            List of model instances
        """
        stmt = select(self.model_class).where(*conditions)

        if order_by is not None:
            stmt = stmt.order_by(order_by)

        if limit is not None:
            stmt = stmt.limit(limit)

        instances = list(session.scalars(stmt).all())

        self.log.debug(
            f"Repository.find_many_where: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
                "found_count": len(instances),
                "limit": limit,
            },
        )

        return instances

    def exists(self, session: Session, *conditions: ColumnElement[bool]) -> bool:
        """
        Check if any record matching conditions exists.

        Returns:
            True if at least one record exists, False otherwise
        """
        return self.count(session, *conditions) > 0

    def count(self, session: Session, *conditions: ColumnElement[bool]) -> int:
        """
        Count records matching conditions.

        Args:
            session: Database session
            *conditions: SQLAlchemy filter conditions

        Returns:
            Number of matching records
        """
        stmt = select(func.count()).select_from(self.model_class).where(*conditions)
        count = session.execute(stmt).scalar_one()

        self.log.debug(
            f"Repository.count: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
                "count": count,
            },
        )

        return count

    def max_value(self, session: Session, column: InstrumentedAttribute) -> Optional[Any]:
        """
        Largest value of ``column`` across the table, or None if it is empty.
        """
        return session.execute(select(func.max(column))).scalar_one()

    def add(self, session: Session, instance: T) -> T:
        """
        Add a new instance to the session.

        Args:
            session: Database session
            instance: Model instance to add

        Returns:
            The added instance
        """
        session.add(instance)

        self.log.debug(
            f"Repository.add: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
            },
        )

        return instance

    def delete(self, session: Session, instance: T) -> None:
        """
        Delete an instance from the database.

        Args:
            session: Database session
            instance: Model instance to delete
        """
        session.delete(instance)

        self.log.debug(
            f"Repository.delete: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
            },
        )
