"""
Favorites Ledger

Adds and removes entries in a user's favorite route list and persists the
user through the UserStore.

The JSON column is always replaced with a new list instead of being mutated
in place, so SQLAlchemy sees the change. If saving fails the previous list
is put back, leaving the in-memory user as it was before the call.
"""

from typing import Any

from app.errors import StoreError
from app.models import User
from app.services.users import UserStore


async def add_favorite(store: UserStore, user: User, route_id: str, tags: Any = None) -> User:
    """Append {id, tags} to the user's favorites. Duplicate ids are allowed."""
    entry = {"id": route_id, "tags": tags}
    return await _replace_favorites(store, user, list(user.favorites or []) + [entry])


async def remove_favorite(store: UserStore, user: User, route_id: str) -> User:
    """Remove every favorite whose id equals route_id."""
    remaining = [route for route in (user.favorites or []) if route.get("id") != route_id]
    return await _replace_favorites(store, user, remaining)


async def _replace_favorites(store: UserStore, user: User, favorites: list[dict]) -> User:
    previous = user.favorites
    user.favorites = favorites
    try:
        return await store.save(user)
    except StoreError:
        user.favorites = previous
        raise
