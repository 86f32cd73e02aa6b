"""
Authentication Routes

Username/password accounts with long-lived access tokens:
1. POST /signup creates the account and returns its access token
2. POST /signin exchanges username and password for the same token
3. Clients send the token as the Authorization header from then on

Both routes are rate limited per client address.
"""

from fastapi import APIRouter, Depends, Request, status

from app.config import settings
from app.dependencies import get_user_store
from app.limiter import limiter
from app.schemas import SigninRequest, SignupRequest
from app.services.auth import sign_in, sign_up
from app.services.users import UserStore


router = APIRouter(tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def signup(
    request: Request,
    body: SignupRequest,
    store: UserStore = Depends(get_user_store),
):
    """
    Create an account.

    Returns 201 with the new user's id, username, email and access token.
    A password shorter than 5 characters, or a taken username/email,
    gives 400 and creates nothing.
    """
    user = await sign_up(store, body.username, body.password, body.email)
    return {
        "response": {
            "userId": user.id,
            "username": user.username,
            "accessToken": user.access_token,
            "email": user.email,
        },
        "success": True,
    }


@router.post("/signin")
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def signin(
    request: Request,
    body: SigninRequest,
    store: UserStore = Depends(get_user_store),
):
    """Return the user's access token, or 404 if the credentials don't match."""
    user = await sign_in(store, body.username, body.password)
    return {
        "response": {
            "userId": user.id,
            "username": user.username,
            "accessToken": user.access_token,
        },
        "success": True,
    }
