"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, PlaceId wrap UUIDs — never use bare UUID in domain logic
    - Coordinates are immutable; latitude in [-90, 90], longitude in [-180, 180]

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - Coordinates as frozen dataclass: the geocoder returns a value, not a dict
"""

from dataclasses import dataclass
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
PlaceId = NewType("PlaceId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Coordinates:
    """A resolved latitude/longitude pair."""
    lat: float
    lng: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"longitude out of range: {self.lng}")

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}
