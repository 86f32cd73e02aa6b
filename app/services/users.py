"""
User Store

Persistence for user accounts on top of an async SQLAlchemy session.
Route handlers and services only talk to UserStore, so database failures
are translated into StoreError in exactly one place.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.errors import StoreError
from app.models import User

logger = logging.getLogger(__name__)


class UserStore:
    """Create, look up and save users in one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_token(self, access_token: str) -> User | None:
        return await self._find_one(User.access_token == access_token)

    async def find_by_username(self, username: str) -> User | None:
        return await self._find_one(User.username == username)

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Insert a new user. The access token is generated by the model default.

        Raises:
            StoreError: duplicate username/email or any database failure
        """
        user = User(username=username, email=email, password=password_hash, favorites=[])
        self.db.add(user)
        try:
            await self.db.commit()
            await self.db.refresh(user)
        except IntegrityError:
            await self.db.rollback()
            raise StoreError("Username or email is already taken")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not create user {username}: {e}")
            raise StoreError()
        return user

    async def save(self, user: User) -> User:
        """Commit pending changes to a user. Rolls back and raises StoreError on failure."""
        self.db.add(user)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not save user {user.id}: {e}")
            raise StoreError("Could not save changes")
        return user

    async def _find_one(self, condition) -> User | None:
        try:
            result = await self.db.execute(select(User).filter(condition))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}")
            raise StoreError()
