"""User ORM — account credentials plus the ordered list of owned place ids.

Invariants:
    - id is UUID primary key, immutable
    - email is unique (unique index is the last line of defence against signup races)
    - password holds a salted hash, never the plain credential
    - places is a JSON array of place id strings, mutated by value only
    - version increments on every UPDATE; a stale write raises StaleDataError

Design Decisions:
    - JSON reference list instead of a join table: keeps the user record
      self-contained so the coordinator owns both sides of the reference explicitly
    - version_id_col: optimistic guard for concurrent place create/delete of one user
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from yourplaces.db.base import Base


class User(Base):
    """Account that owns zero or more places."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    places: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __mapper_args__ = {"version_id_col": version}
