"""Access Tokens — issue and verify signed JWTs that carry the caller's user id.

Invariants:
    - sub claim is the user id (UUID string); exp is always set
    - decode_access_token raises AuthenticationError for any bad token, never JWTError
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from yourplaces.core.domain_types import UserId
from yourplaces.core.errors import AuthenticationError


def issue_access_token(
    user_id: UUID,
    email: str,
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str, secret: str, algorithm: str = "HS256",
) -> UserId:
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        raise AuthenticationError()
    try:
        return UserId(UUID(payload["sub"]))
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError()
