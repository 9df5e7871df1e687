"""Referential Integrity — audit of the User.places ↔ Place.creator agreement.

Invariants:
    - Every place's creator exists and lists the place id exactly once
    - Every id in a user's places names an existing place created by that user
    - Pure: takes plain snapshots, returns human-readable violations (empty = consistent)
"""

from collections.abc import Iterable, Mapping, Sequence
from uuid import UUID


def find_integrity_violations(
    user_places: Mapping[UUID, Sequence[str]],
    place_creators: Mapping[UUID, UUID],
) -> list[str]:
    """Compare users' reference lists with places' creators.

    user_places maps user id -> that user's `places` list (id strings);
    place_creators maps place id -> creator id.
    """
    violations: list[str] = []

    for place_id, creator_id in place_creators.items():
        refs = user_places.get(creator_id)
        if refs is None:
            violations.append(f"place {place_id}: creator {creator_id} does not exist")
            continue
        count = list(refs).count(str(place_id))
        if count != 1:
            violations.append(
                f"place {place_id}: listed {count} times by creator {creator_id}"
            )

    for user_id, refs in user_places.items():
        for ref in dict.fromkeys(refs):
            place_id = _parse(ref)
            if place_id is None or place_id not in place_creators:
                violations.append(f"user {user_id}: dangling place reference {ref}")
            elif place_creators[place_id] != user_id:
                violations.append(
                    f"user {user_id}: references place {ref} "
                    f"created by {place_creators[place_id]}"
                )

    return violations


def _parse(ref: str) -> UUID | None:
    try:
        return UUID(ref)
    except ValueError:
        return None


def summarize(violations: Iterable[str]) -> dict:
    items = list(violations)
    return {"consistent": not items, "violations": items}
