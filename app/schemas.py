"""
Request and Response Schemas

Pydantic models for JSON bodies. Field names follow the public API
(camelCase), which is what the mobile and web clients send and expect.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.models import User


class SignupRequest(BaseModel):
    username: str
    password: str
    email: str


class SigninRequest(BaseModel):
    username: str
    password: str


class ProfileUpdate(BaseModel):
    profilePicture: str | None = None


class FavoriteRouteId(BaseModel):
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def numeric_id_to_str(cls, value):
        # Overpass relation ids arrive as numbers from some clients
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class FavoriteRoute(FavoriteRouteId):
    """A route reference as sent by the client; tags are stored as-is."""
    tags: Any = None


class AddFavoriteRequest(BaseModel):
    route: FavoriteRoute


class RemoveFavoriteRequest(BaseModel):
    route: FavoriteRouteId


class UserOut(BaseModel):
    """
    Public view of a user.

    Never includes the password hash or the access token.
    """
    userId: int
    username: str
    email: str
    favorites: list[dict] = Field(default_factory=list)
    profilePicture: str | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            userId=user.id,
            username=user.username,
            email=user.email,
            favorites=list(user.favorites or []),
            profilePicture=user.profile_picture,
        )


def user_envelope(user: User) -> dict:
    """Standard {"response": user, "success": true} body."""
    return {"response": UserOut.from_user(user).model_dump(), "success": True}


def tracks_envelope(data: Any) -> dict:
    """Standard {"response": {"data": ...}, "status": "success"} body."""
    return {"response": {"data": data}, "status": "success"}
