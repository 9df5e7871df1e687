"""Place Routes — read, create, edit and delete places.

Invariants:
    - Mutating routes require a bearer token (get_caller_id); reads are public
    - Routes hold no store or session: every operation goes through PlaceCoordinator
    - Errors propagate as YourPlacesError to api/error_handlers.py
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from yourplaces.api.deps import get_caller_id, get_place_coordinator
from yourplaces.core.domain_types import PlaceId, UserId
from yourplaces.schemas.place import (
    MessageResponse, PlaceCreate, PlaceListResponse, PlaceOut,
    PlaceResponse, PlaceUpdate,
)
from yourplaces.services.place_coordinator import PlaceCoordinator

router = APIRouter(prefix="/api/places", tags=["places"])


@router.get("/user/{user_id}", response_model=PlaceListResponse)
async def list_places_by_user(
    user_id: UUID,
    coordinator: PlaceCoordinator = Depends(get_place_coordinator),
):
    """All places of a user, in the user's own order."""
    places = await coordinator.list_user_places(UserId(user_id))
    return PlaceListResponse(places=[PlaceOut.from_model(p) for p in places])


@router.get("/{place_id}", response_model=PlaceResponse)
async def get_place(
    place_id: UUID,
    coordinator: PlaceCoordinator = Depends(get_place_coordinator),
):
    place = await coordinator.get_place(PlaceId(place_id))
    return PlaceResponse(place=PlaceOut.from_model(place))


@router.post(
    "", response_model=PlaceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_place(
    body: PlaceCreate,
    caller_id: UserId = Depends(get_caller_id),
    coordinator: PlaceCoordinator = Depends(get_place_coordinator),
):
    """Create a place owned by the caller."""
    place = await coordinator.create_place(
        title=body.title,
        description=body.description,
        address=body.address,
        caller_id=caller_id,
        image=body.image,
    )
    return PlaceResponse(place=PlaceOut.from_model(place))


@router.patch("/{place_id}", response_model=PlaceResponse)
async def update_place(
    place_id: UUID,
    body: PlaceUpdate,
    caller_id: UserId = Depends(get_caller_id),
    coordinator: PlaceCoordinator = Depends(get_place_coordinator),
):
    place = await coordinator.update_place(
        PlaceId(place_id), caller_id, body.title, body.description,
    )
    return PlaceResponse(place=PlaceOut.from_model(place))


@router.delete("/{place_id}", response_model=MessageResponse)
async def delete_place(
    place_id: UUID,
    caller_id: UserId = Depends(get_caller_id),
    coordinator: PlaceCoordinator = Depends(get_place_coordinator),
):
    await coordinator.delete_place(PlaceId(place_id), caller_id)
    return MessageResponse(message="Deleted Place.")
