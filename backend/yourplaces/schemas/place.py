"""Place Schemas — request bodies and the public Place shape.

Invariants:
    - title non-empty, description at least 5 chars, address non-empty (all stripped)
    - location is never accepted from the client
    - creator rendered as an id string
"""

from pydantic import BaseModel, Field, field_validator

from yourplaces.models.place import Place


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty or whitespace")
    return v


class PlaceCreate(BaseModel):
    """Body of POST /api/places."""
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=5, max_length=5_000)
    address: str = Field(min_length=1, max_length=1_000)
    image: str | None = Field(None, max_length=1024)

    @field_validator("title", "description", "address")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class PlaceUpdate(BaseModel):
    """Body of PATCH /api/places/{pid}."""
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=5, max_length=5_000)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class LocationOut(BaseModel):
    lat: float
    lng: float


class PlaceOut(BaseModel):
    """Public Place shape."""
    id: str
    title: str
    description: str
    address: str
    location: LocationOut
    image: str | None
    creator: str

    @classmethod
    def from_model(cls, place: Place) -> "PlaceOut":
        return cls(
            id=str(place.id),
            title=place.title,
            description=place.description,
            address=place.address,
            location=LocationOut(**place.location.to_dict()),
            image=place.image,
            creator=str(place.creator_id),
        )


class PlaceResponse(BaseModel):
    place: PlaceOut


class PlaceListResponse(BaseModel):
    places: list[PlaceOut]


class MessageResponse(BaseModel):
    message: str
