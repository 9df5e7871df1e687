"""User Store — persistence for User records, bound to one AsyncSession.

Invariants:
    - get/find_by_email raise ResourceNotFoundError instead of returning None
    - create raises DuplicateEmailError for a registered email, including the
      race where the unique index rejects a concurrent insert
    - append_place/remove_place mutate User.places by value and only run inside
      the coordinator's transaction (they never commit)

Design Decisions:
    - Reassign the JSON list instead of mutating it in place: SQLAlchemy only
      tracks attribute sets on plain JSON columns, and the reassignment bumps
      User.version for optimistic concurrency
    - for_update=True emits SELECT ... FOR UPDATE (ignored by SQLite) and refreshes
      any copy already in the identity map, so the list we extend is the locked one
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from yourplaces.core.errors import (
    DuplicateEmailError, ErrorContext, ResourceNotFoundError,
)
from yourplaces.models.user import User


class UserStore:
    """User lookups and reference-list mutations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UUID, for_update: bool = False) -> User:
        query = select(User).where(User.id == user_id)
        if for_update:
            query = query.with_for_update().execution_options(
                populate_existing=True,
            )
        result = await self.db.execute(query)
        user = result.scalar_one_or_none()
        if user is None:
            raise ResourceNotFoundError(
                "User", "Could not find user for the provided id.",
                ErrorContext(user_id=str(user_id)),
            )
        return user

    async def find_by_email(self, email: str) -> User:
        result = await self.db.execute(
            select(User).where(User.email == email),
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise ResourceNotFoundError(
                "User", "Could not find user for the provided email.",
            )
        return user

    async def email_taken(self, email: str) -> bool:
        result = await self.db.execute(
            select(User.id).where(User.email == email),
        )
        return result.first() is not None

    async def list_all(self) -> list[User]:
        result = await self.db.execute(
            select(User).order_by(User.created_at),
        )
        return list(result.scalars().all())

    async def create(
        self, name: str, email: str, password_hash: str,
        image: str | None = None,
    ) -> User:
        if await self.email_taken(email):
            raise DuplicateEmailError()
        user = User(
            name=name, email=email, password=password_hash,
            image=image, places=[],
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            # concurrent signup won the unique index
            raise DuplicateEmailError()
        return user

    async def append_place(self, user_id: UUID, place_id: UUID) -> User:
        user = await self.get(user_id, for_update=True)
        user.places = [*user.places, str(place_id)]
        await self.db.flush()
        return user

    async def remove_place(self, user_id: UUID, place_id: UUID) -> User:
        user = await self.get(user_id, for_update=True)
        ref = str(place_id)
        user.places = [p for p in user.places if p != ref]
        await self.db.flush()
        return user
