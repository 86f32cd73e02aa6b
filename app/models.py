"""
Database Models for the Hiking Routes API

This module defines the SQLAlchemy ORM models for the application:
- User: Account with credentials, access token and favorite routes

Favorites are stored inline as a JSON list rather than in a separate table:
they are always read and written together with their owner, keep their
insertion order, and carry arbitrary tag metadata from the route provider.
"""

import secrets
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base


# Base class for all ORM models
Base = declarative_base()


def generate_access_token() -> str:
    """Return a new opaque access token (128 random bytes, hex encoded)."""
    return secrets.token_hex(128)


class User(Base):
    """
    User model representing a registered hiker.

    The access token is generated once when the row is created and is never
    rotated. It is the only credential needed on authenticated requests, so
    it is only ever returned by signup and signin.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # unique=True prevents duplicate accounts, index=True speeds up signin
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    # bcrypt hash, never the plain password
    password = Column(String, nullable=False)

    # Looked up on every authenticated request
    access_token = Column(
        String,
        unique=True,
        index=True,
        nullable=False,
        default=generate_access_token,
    )

    # Ordered list of {"id": str, "tags": any}; duplicates allowed
    favorites = Column(JSON, nullable=False, default=list)

    # Optional picture URI set from the profile page
    profile_picture = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
