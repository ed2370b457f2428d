"""
Table model for the SQL character repository.

Stores the plain ``{name, class, level}`` record of each character plus its
storage key and insertion position.
"""

from typing import Any, Dict

from sqlalchemy import Column, Index, Integer
from sqlmodel import Field, SQLModel


class CharacterRecord(SQLModel, table=True):
    """
    Stored row for one character.

    Schema-only model; the Character aggregate owns every rule and rows are
    re-validated on the way out.

    Attributes:
        key: Lower-cased name, the case-insensitive identity
        name: Name as last saved (original casing)
        character_class: Canonical class name
        level: Level 1-100
        position: Insertion order, kept when the row is overwritten

    Indexes:
        - character_class
        - level
        - position (unique)
    """

    # ========================================================================
    # TABLE CONFIGURATION
    # ========================================================================

    __tablename__ = "characters"
    __table_args__ = (
        Index("ix_characters_class", "character_class"),
        Index("ix_characters_level", "level"),
    )

    # ========================================================================
    # COLUMNS
    # ========================================================================

    key: str = Field(primary_key=True, max_length=100)
    name: str = Field(max_length=100, nullable=False)
    character_class: str = Field(max_length=20, nullable=False)
    level: int = Field(nullable=False)
    position: int = Field(sa_column=Column(Integer, nullable=False, unique=True))

    def to_plain_object(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "class": self.character_class,
            "level": self.level,
        }

    def __repr__(self) -> str:
        return (
            f"<CharacterRecord key={self.key!r} class={self.character_class!r} "
            f"level={self.level} position={self.position}>"
        )
