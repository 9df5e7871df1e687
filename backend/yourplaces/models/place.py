"""Place ORM — a geocoded location record owned by exactly one user.

Invariants:
    - id is UUID primary key, immutable
    - creator_id references users.id and never changes after insert
    - latitude/longitude come from the geocoder, never from the request body
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from yourplaces.core.domain_types import Coordinates
from yourplaces.db.base import Base


class Place(Base):
    """Location record; its id also lives in the creator's User.places."""
    __tablename__ = "places"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    creator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def location(self) -> Coordinates:
        return Coordinates(lat=self.latitude, lng=self.longitude)
