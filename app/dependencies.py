"""
FastAPI Dependencies

Dependency injection functions shared by the route modules:

- get_user_store: UserStore bound to the request's database session
- get_current_user: resolves the Authorization header to a User (or 401)
- get_route_gateway: the RouteSearchGateway created at startup

Usage in routes:
    @router.get("/profile")
    async def profile(user: User = Depends(get_current_user)):
        # user is guaranteed to be authenticated here
        ...
"""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import User
from app.services.auth import authenticate
from app.services.tracks import RouteSearchGateway
from app.services.users import UserStore


async def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserStore(db)


async def get_current_user(
    authorization: str | None = Header(default=None),
    store: UserStore = Depends(get_user_store),
) -> User:
    """
    Dependency that requires an authenticated user.

    The Authorization header carries the raw access token, with no
    "Bearer" prefix.

    Raises:
        Unauthenticated: header missing, empty, or unknown token (401)
        StoreError: the user lookup failed (400)
    """
    return await authenticate(store, authorization)


def get_route_gateway(request: Request) -> RouteSearchGateway:
    """Return the gateway stored on app.state by the lifespan handler."""
    return request.app.state.route_gateway
