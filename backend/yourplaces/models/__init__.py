"""ORM Models — SQLAlchemy declarative models for users and places.

Invariants:
    - All models inherit from Base (db/base.py)
    - User.places and Place.creator_id are two halves of one reference;
      only services/place_coordinator.py writes both

Design Decisions:
    - One file per entity for locality
    - All models imported here so metadata is complete before create_all / autogenerate
"""

from yourplaces.models.user import User  # noqa: F401
from yourplaces.models.place import Place  # noqa: F401
