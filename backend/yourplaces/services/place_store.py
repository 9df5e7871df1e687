"""Place Store — persistence for Place records, bound to one AsyncSession.

Invariants:
    - get raises ResourceNotFoundError instead of returning None
    - list_by_creator goes through User.places (not a scan of places.creator_id)
      and preserves that list's order
    - insert/remove only flush; visibility depends on the enclosing transaction
"""

import uuid
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from yourplaces.core.errors import ErrorContext, ResourceNotFoundError
from yourplaces.models.place import Place
from yourplaces.models.user import User


class PlaceStore:
    """Place lookups and single-entity writes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, place_id: UUID) -> Place:
        result = await self.db.execute(
            select(Place).where(Place.id == place_id),
        )
        place = result.scalar_one_or_none()
        if place is None:
            raise ResourceNotFoundError(
                "Place", "Could not find a place for the provided id.",
                ErrorContext(place_id=str(place_id)),
            )
        return place

    async def list_by_creator(self, user_id: UUID) -> list[Place]:
        """Places referenced by the user's list, in list order.

        A missing user and a user without places are the same NotFound here.
        """
        result = await self.db.execute(
            select(User.places).where(User.id == user_id),
        )
        refs = result.scalar_one_or_none()
        if not refs:
            raise ResourceNotFoundError(
                "Place", "Could not find places for the provided user id.",
                ErrorContext(user_id=str(user_id)),
            )

        ids = [UUID(ref) for ref in refs]
        result = await self.db.execute(
            select(Place).where(Place.id.in_(ids)),
        )
        by_id = {p.id: p for p in result.scalars().all()}
        return [by_id[i] for i in ids if i in by_id]

    async def insert(self, place: Place) -> Place:
        if place.id is None:
            place.id = uuid.uuid4()
        self.db.add(place)
        await self.db.flush()
        return place

    async def remove(self, place_id: UUID) -> None:
        place = await self.get(place_id)
        await self.db.delete(place)
        await self.db.flush()

    async def update_fields(
        self, place_id: UUID, title: str, description: str,
    ) -> Place:
        place = await self.get(place_id)
        place.title = title
        place.description = description
        await self.db.flush()
        return place
