"""
SQL character repository.

Purpose
-------
CharacterRepository backend on SQLAlchemy 2.0, for any database SQLAlchemy
supports (SQLite by default).

Responsibilities
----------------
- Map Character aggregates to ``characters`` rows and back
- Run every operation in its own transaction (commit on success, rollback on
  any exception) so no partial write is ever observable
- Translate backend failures into a single RepositoryError

Non-Responsibilities
--------------------
- Retries (a RepositoryError is raised once; the caller decides)
- Schema migrations (``create_all`` only creates missing tables)
- Business rules (rows are re-validated through Character.from_plain_object)

Transaction Model
-----------------
>>> with repository._transaction("save") as session:
...     row = repository._rows.get(session, "aragorn")
...     # Automatic commit on exit, rollback on exception

Design Notes
------------
- Insertion order lives in the ``position`` column. Upserts update the row in
  place, so an overwritten character keeps its original position.
- Writes are serialized per repository instance by a lock, which keeps
  ``position`` assignment consistent for concurrent savers in one process.
- Class and level-range queries run natively in SQL; specification queries
  are evaluated in Python over ``find_all``.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from roster.core.config import Config
from roster.core.exceptions import RepositoryError
from roster.core.logging import get_logger
from roster.domain.models.character import (
    Character,
    CharacterClass,
    ClassLike,
    LevelLike,
    NameLike,
)
from roster.modules.character.models import CharacterRecord
from roster.modules.character.repository import CharacterRepository
from roster.modules.shared.base_repository import BaseRepository

if TYPE_CHECKING:
    from logging import Logger


def create_roster_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Build an Engine from explicit arguments or Config.

    In-memory SQLite URLs get a StaticPool so every session shares the one
    connection that holds the database.
    """
    database_url = url or Config.DATABASE_URL
    kwargs = {"echo": Config.DATABASE_ECHO if echo is None else echo}

    if database_url.startswith("sqlite") and ":memory:" in database_url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    return create_engine(database_url, **kwargs)


class SqlCharacterRepository(CharacterRepository):
    """
    SQLAlchemy-backed character store.

    Args:
        engine: SQLAlchemy Engine to use
        create_schema: Create the ``characters`` table if missing
        logger: Optional logger; defaults to this module's logger
    """

    def __init__(
        self,
        engine: Engine,
        create_schema: bool = True,
        logger: Optional[Logger] = None,
    ) -> None:
        self.engine = engine
        self.log = logger or get_logger(__name__)
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        self._rows: BaseRepository[CharacterRecord] = BaseRepository(CharacterRecord, self.log)
        self._write_lock = threading.Lock()

        if create_schema:
            try:
                SQLModel.metadata.create_all(engine)
            except SQLAlchemyError as exc:
                raise RepositoryError("create_schema", str(exc), original_error=exc) from exc

    @classmethod
    def from_config(cls, logger: Optional[Logger] = None) -> SqlCharacterRepository:
        """Repository on Config.DATABASE_URL."""
        return cls(create_roster_engine(), logger=logger)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        try:
            with self._session_factory.begin() as session:
                yield session
        except SQLAlchemyError as exc:
            self.log.error(
                f"Repository operation failed: {operation}",
                extra={"operation": operation, "error_type": type(exc).__name__},
                exc_info=True,
            )
            raise RepositoryError(operation, str(exc), original_error=exc) from exc

    @staticmethod
    def _to_character(row: CharacterRecord) -> Character:
        return Character.from_plain_object(row.to_plain_object())

    # ========================================================================
    # STORAGE PRIMITIVES
    # ========================================================================

    def find_by_name(self, name: NameLike) -> Optional[Character]:
        key = self._key(name)
        with self._transaction("find_by_name") as session:
            row = self._rows.get(session, key)
            return self._to_character(row) if row is not None else None

    def find_all(self) -> List[Character]:
        with self._transaction("find_all") as session:
            rows = self._rows.find_many_where(session, order_by=CharacterRecord.position)
            return [self._to_character(row) for row in rows]

    def save(self, character: Character) -> Character:
        self._check_character(character)
        record = character.to_plain_object()
        key = character.name.key

        with self._write_lock, self._transaction("save") as session:
            row = self._rows.get(session, key)
            if row is None:
                last_position = self._rows.max_value(session, CharacterRecord.position)
                self._rows.add(
                    session,
                    CharacterRecord(
                        key=key,
                        name=record["name"],
                        character_class=record["class"],
                        level=record["level"],
                        position=(last_position or 0) + 1,
                    ),
                )
            else:
                row.name = record["name"]
                row.character_class = record["class"]
                row.level = record["level"]

        return character

    def remove(self, name: NameLike) -> bool:
        key = self._key(name)
        with self._write_lock, self._transaction("remove") as session:
            row = self._rows.get(session, key)
            if row is None:
                return False
            self._rows.delete(session, row)
            return True

    def exists(self, name: NameLike) -> bool:
        key = self._key(name)
        with self._transaction("exists") as session:
            return self._rows.exists(session, CharacterRecord.key == key)

    def count(self) -> int:
        with self._transaction("count") as session:
            return self._rows.count(session)

    # ========================================================================
    # NATIVE QUERIES
    # ========================================================================

    def find_by_class(self, character_class: ClassLike) -> List[Character]:
        canonical = CharacterClass.of(character_class).value
        with self._transaction("find_by_class") as session:
            rows = self._rows.find_many_where(
                session,
                CharacterRecord.character_class == canonical,
                order_by=CharacterRecord.position,
            )
            return [self._to_character(row) for row in rows]

    def find_by_level_range(
        self,
        min_level: LevelLike,
        max_level: LevelLike,
    ) -> List[Character]:
        low, high = self._check_level_range(min_level, max_level)
        with self._transaction("find_by_level_range") as session:
            rows = self._rows.find_many_where(
                session,
                CharacterRecord.level.between(low.value, high.value),
                order_by=CharacterRecord.position,
            )
            return [self._to_character(row) for row in rows]
