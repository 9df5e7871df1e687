"""User Schemas — signup/login bodies and the credential-free User shape.

Invariants:
    - email normalized to lower case before it reaches the store
    - password at least 6 chars; never present in any response schema
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from yourplaces.models.user import User


class UserSignup(BaseModel):
    """Body of POST /api/users/signup."""
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    image: str | None = Field(None, max_length=1024)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class UserLogin(BaseModel):
    """Body of POST /api/users/login."""
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class UserOut(BaseModel):
    """Public User shape."""
    id: str
    name: str
    email: str
    image: str | None
    places: list[str]

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            image=user.image,
            places=list(user.places),
        )


class UserListResponse(BaseModel):
    users: list[UserOut]


class AuthResponse(BaseModel):
    """Signup/login result: the caller's id plus a bearer token."""
    userId: str
    email: str
    token: str
