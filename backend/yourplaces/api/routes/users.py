"""User Routes — listing, signup and login.

Invariants:
    - Responses never include the password hash
    - Signup: 201 {userId, email, token}; duplicate email → 422
    - Login: 200 {userId, email, token}; bad credentials → 403
"""

from fastapi import APIRouter, Depends, status

from yourplaces.api.deps import get_user_accounts
from yourplaces.schemas.user import (
    AuthResponse, UserListResponse, UserLogin, UserOut, UserSignup,
)
from yourplaces.services.user_accounts import AuthResult, UserAccounts

router = APIRouter(prefix="/api/users", tags=["users"])


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        userId=str(result.user.id),
        email=result.user.email,
        token=result.token,
    )


@router.get("", response_model=UserListResponse)
async def list_users(accounts: UserAccounts = Depends(get_user_accounts)):
    users = await accounts.list_users()
    return UserListResponse(users=[UserOut.from_model(u) for u in users])


@router.post(
    "/signup", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: UserSignup, accounts: UserAccounts = Depends(get_user_accounts),
):
    result = await accounts.signup(
        body.name, body.email, body.password, body.image,
    )
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: UserLogin, accounts: UserAccounts = Depends(get_user_accounts),
):
    result = await accounts.login(body.email, body.password)
    return _auth_response(result)
