"""
MyModel - represents the 'my_models' table in the database.

A deliberately small model: an identifier, a unique name, an optional
free-text description and an active flag.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base


class MyModel(Base):
    """
    MyModel row.

    Attributes:
        id: Primary key, auto-incremented
        name: Unique name (e.g., "inventory-sync")
        description: Optional longer description
        active: Whether the record is active (defaults to True)
        created_at: When the row was inserted
    """

    __tablename__ = "my_models"

    # Load server-generated values (created_at, active) during flush.
    # An async session cannot lazy-load them later on attribute access.
    __mapper_args__ = {"eager_defaults": True}

    # ==========================================================================
    # COLUMNS
    # ==========================================================================

    id: Mapped[int] = mapped_column(primary_key=True)

    # NAME
    # ----
    # - Must be unique across all rows
    # - index=True: the API looks rows up by name to detect conflicts

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # ACTIVE
    # ------
    # default: used when Python creates the row
    # server_default: used by raw SQL inserts (and set by the migration)

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    # func.now() renders as CURRENT_TIMESTAMP on SQLite and now() on PostgreSQL
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<MyModel id={self.id} name='{self.name}'>"
