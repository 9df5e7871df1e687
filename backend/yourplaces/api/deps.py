"""API Dependencies — wiring of services and the authenticated caller identity.

Invariants:
    - get_caller_id is the only place bearer tokens are decoded; services receive a UserId
    - Services are built per request from the process singletons (db_manager, geocoder)

Design Decisions:
    - Plain FastAPI Depends() functions: tests override get_geocoder and patch db_manager
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from yourplaces.config import Settings, get_settings
from yourplaces.core.domain_types import UserId
from yourplaces.core.errors import AuthenticationError
from yourplaces.core.repository_protocols import GeocodingResolver
from yourplaces.infrastructure import geocoding
from yourplaces.infrastructure.database import DatabaseSessionManager, get_session_manager
from yourplaces.infrastructure.tokens import decode_access_token
from yourplaces.services.place_coordinator import PlaceCoordinator
from yourplaces.services.user_accounts import UserAccounts

_bearer = HTTPBearer(auto_error=False)


def get_geocoder() -> GeocodingResolver:
    if geocoding.geocoder is None:
        raise RuntimeError("Geocoder not initialized")
    return geocoding.geocoder


def get_caller_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> UserId:
    """Verified caller identity from `Authorization: Bearer <jwt>`."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication failed, token missing.")
    return decode_access_token(
        credentials.credentials,
        settings.jwt_secret,
        settings.jwt_algorithm,
    )


def get_place_coordinator(
    db_manager: DatabaseSessionManager = Depends(get_session_manager),
    geocoder: GeocodingResolver = Depends(get_geocoder),
    settings: Settings = Depends(get_settings),
) -> PlaceCoordinator:
    return PlaceCoordinator(
        db_manager, geocoder, max_attempts=settings.transaction_max_attempts,
    )


def get_user_accounts(
    db_manager: DatabaseSessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_settings),
) -> UserAccounts:
    return UserAccounts(db_manager, settings)
