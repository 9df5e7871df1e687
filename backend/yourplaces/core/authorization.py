"""Authorization Check — ownership predicate shared by update and delete.

Invariants:
    - Pure: no IO, no side effects
    - Caller owns a place iff caller_id == place.creator_id
"""

from uuid import UUID

from yourplaces.core.errors import ErrorContext, ForbiddenError


def is_owner(caller_id: UUID, creator_id: UUID) -> bool:
    return caller_id == creator_id


def ensure_owner(caller_id: UUID, creator_id: UUID, action: str) -> None:
    """Raise ForbiddenError unless the caller created the resource."""
    if not is_owner(caller_id, creator_id):
        raise ForbiddenError(
            f"You are not allowed to {action} this place.",
            ErrorContext(user_id=str(caller_id)),
        )
