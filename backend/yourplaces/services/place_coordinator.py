"""Place Coordinator — atomic create/delete of a Place together with its owner's reference list.

Invariants:
    - create_place and delete_place write the Place row and User.places in ONE
      transaction: readers see both writes or neither
    - Geocoding and the caller lookup happen before the transaction opens; their
      failures leave no writes behind
    - update_place and delete_place check ownership before any write
    - update_place touches one entity, so it runs without the cross-entity transaction
    - Only TransactionConflictError is retried, up to max_attempts in total;
      NotFound / Forbidden / UnprocessableAddress surface immediately

Design Decisions:
    - Every attempt opens a fresh unit of work (db_manager.transaction()): a
      rolled-back attempt shares nothing with the retry
    - Owner row locked (SELECT ... FOR UPDATE) inside the transaction, User.version
      as the fallback guard where the backend ignores row locks
    - Reads (get_place, list_user_places) live here too so routes never hold a store
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from yourplaces.core.authorization import ensure_owner
from yourplaces.core.domain_types import PlaceId, UserId
from yourplaces.core.errors import TransactionConflictError
from yourplaces.core.repository_protocols import GeocodingResolver
from yourplaces.infrastructure.database import DatabaseSessionManager
from yourplaces.models.place import Place
from yourplaces.services.place_store import PlaceStore
from yourplaces.services.user_store import UserStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PlaceCoordinator:
    """Keeps Place.creator and User.places in agreement."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        geocoder: GeocodingResolver,
        max_attempts: int = 2,
    ):
        self.db_manager = db_manager
        self.geocoder = geocoder
        self.max_attempts = max(1, max_attempts)

    # ─── Reads ───────────────────────────────────────────────────

    async def get_place(self, place_id: PlaceId) -> Place:
        async with self.db_manager.session() as db:
            return await PlaceStore(db).get(place_id)

    async def list_user_places(self, user_id: UserId) -> list[Place]:
        async with self.db_manager.session() as db:
            return await PlaceStore(db).list_by_creator(user_id)

    # ─── Cross-entity writes ─────────────────────────────────────

    async def create_place(
        self,
        title: str,
        description: str,
        address: str,
        caller_id: UserId,
        image: str | None = None,
    ) -> Place:
        """Insert a place owned by the caller and append it to the caller's list."""
        coordinates = await self.geocoder.resolve(address)

        async with self.db_manager.session() as db:
            await UserStore(db).get(caller_id)

        async def work(db: AsyncSession) -> Place:
            users = UserStore(db)
            # re-read under lock: the user may have changed since the check above
            await users.get(caller_id, for_update=True)
            place = await PlaceStore(db).insert(Place(
                title=title,
                description=description,
                address=address,
                latitude=coordinates.lat,
                longitude=coordinates.lng,
                image=image,
                creator_id=caller_id,
            ))
            await users.append_place(caller_id, place.id)
            return place

        place = await self._run_in_transaction("create_place", work)
        logger.info(
            f"Place {place.id} created",
            extra={"user_id": str(caller_id), "place_id": str(place.id)},
        )
        return place

    async def delete_place(self, place_id: PlaceId, caller_id: UserId) -> None:
        """Remove a place owned by the caller and drop it from the caller's list."""
        async with self.db_manager.session() as db:
            place = await PlaceStore(db).get(place_id)
        ensure_owner(caller_id, place.creator_id, "delete")
        owner_id = place.creator_id

        async def work(db: AsyncSession) -> None:
            # NotFound here means a concurrent delete won
            await PlaceStore(db).remove(place_id)
            await UserStore(db).remove_place(owner_id, place_id)

        await self._run_in_transaction("delete_place", work)
        logger.info(
            f"Place {place_id} deleted",
            extra={"user_id": str(caller_id), "place_id": str(place_id)},
        )

    # ─── Single-entity write ─────────────────────────────────────

    async def update_place(
        self,
        place_id: PlaceId,
        caller_id: UserId,
        title: str,
        description: str,
    ) -> Place:
        async with self.db_manager.session() as db:
            places = PlaceStore(db)
            place = await places.get(place_id)
            ensure_owner(caller_id, place.creator_id, "edit")
            place = await places.update_fields(place_id, title, description)
            await db.commit()
            return place

    # ─── Transaction runner ──────────────────────────────────────

    async def _run_in_transaction(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """Run work in a fresh unit of work, retrying transient commit conflicts."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                async with self.db_manager.transaction() as db:
                    return await work(db)
            except TransactionConflictError:
                if attempt >= self.max_attempts:
                    logger.error(
                        f"{operation}: transaction conflict, giving up",
                        extra={"operation": operation, "attempt": attempt},
                    )
                    raise
                logger.warning(
                    f"{operation}: transaction conflict, retrying",
                    extra={"operation": operation, "attempt": attempt},
                )
        raise AssertionError("unreachable")  # pragma: no cover
