"""
Account Authentication Service

Users receive an opaque access token when they sign up. The token is a
capability: whoever presents it in the Authorization header is that user,
for as long as the account exists. Verifying it is a plain equality lookup
in the user store (no signature, no expiry).

Passwords are only used at signin to hand the token back out.
"""

import logging

from app.errors import NotFound, Unauthenticated, ValidationError
from app.models import User
from app.services.security import hash_password, verify_password
from app.services.users import UserStore

logger = logging.getLogger(__name__)

# Shortest password accepted at signup
MIN_PASSWORD_LENGTH = 5


async def authenticate(store: UserStore, token: str | None) -> User:
    """
    Resolve an access token to its user.

    Args:
        store: User store for the current request
        token: Raw value of the Authorization header (may be None or empty)

    Returns:
        The user owning the token

    Raises:
        Unauthenticated: no user has this token
        StoreError: the lookup itself failed
    """
    if not token:
        raise Unauthenticated()

    user = await store.find_by_token(token)
    if user is None:
        logger.info("Rejected request with unknown access token")
        raise Unauthenticated()
    return user


async def sign_up(store: UserStore, username: str, password: str, email: str) -> User:
    """
    Create an account with a hashed password and a fresh access token.

    Raises:
        ValidationError: password shorter than MIN_PASSWORD_LENGTH
        StoreError: username/email taken or the store failed
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    password_hash = await hash_password(password)
    user = await store.create(username=username, email=email, password_hash=password_hash)
    logger.info(f"Created user {user.id} ({user.username})")
    return user


async def sign_in(store: UserStore, username: str, password: str) -> User:
    """
    Check credentials and return the matching user.

    Unknown usernames and wrong passwords raise the same NotFound error so
    callers can't tell which one was wrong.
    """
    user = await store.find_by_username(username)
    if user is None or not await verify_password(password, user.password):
        raise NotFound()
    return user
