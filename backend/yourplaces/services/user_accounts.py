"""User Accounts — signup, login, and listing.

Invariants:
    - Signup never creates a second user for a registered email (DuplicateEmailError, 422)
    - Login answers unknown email and wrong password identically (InvalidCredentialsError, 403)
    - Passwords are hashed before they reach the store and verified in constant time
    - Issued tokens carry the user id; verifying them is the API layer's job
"""

import logging
from dataclasses import dataclass

from yourplaces.config import Settings
from yourplaces.core.credentials import hash_password, verify_password
from yourplaces.core.errors import InvalidCredentialsError, ResourceNotFoundError
from yourplaces.infrastructure.database import DatabaseSessionManager
from yourplaces.infrastructure.tokens import issue_access_token
from yourplaces.models.user import User
from yourplaces.services.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


class UserAccounts:
    """Account flows on top of UserStore."""

    def __init__(self, db_manager: DatabaseSessionManager, settings: Settings):
        self.db_manager = db_manager
        self.settings = settings

    async def list_users(self) -> list[User]:
        async with self.db_manager.session() as db:
            return await UserStore(db).list_all()

    async def signup(
        self, name: str, email: str, password: str, image: str | None = None,
    ) -> AuthResult:
        password_hash = hash_password(password, self.settings.password_hash_method)
        async with self.db_manager.transaction() as db:
            user = await UserStore(db).create(name, email, password_hash, image)
        logger.info(f"User {user.id} signed up", extra={"user_id": str(user.id)})
        return AuthResult(user=user, token=self._issue_token(user))

    async def login(self, email: str, password: str) -> AuthResult:
        async with self.db_manager.session() as db:
            try:
                user = await UserStore(db).find_by_email(email)
            except ResourceNotFoundError:
                user = None
        if not verify_password(
            user.password if user else None, password,
            self.settings.password_hash_method,
        ):
            raise InvalidCredentialsError()
        return AuthResult(user=user, token=self._issue_token(user))

    def _issue_token(self, user: User) -> str:
        return issue_access_token(
            user.id,
            user.email,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_minutes=self.settings.access_token_expire_minutes,
        )
