"""
Profile and Favorites Routes

All routes here require the Authorization header:
- GET /profile: the current user
- POST /profile: update the profile picture
- POST /favorite: add a route to favorites
- DELETE /favorite: remove a route (every entry with that id) from favorites
"""

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_user_store
from app.errors import StoreError
from app.models import User
from app.schemas import AddFavoriteRequest, ProfileUpdate, RemoveFavoriteRequest, user_envelope
from app.services.favorites import add_favorite, remove_favorite
from app.services.users import UserStore


router = APIRouter(tags=["profile"])


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)):
    return user_envelope(user)


@router.post("/profile")
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    store: UserStore = Depends(get_user_store),
):
    previous = user.profile_picture
    user.profile_picture = body.profilePicture
    try:
        await store.save(user)
    except StoreError:
        user.profile_picture = previous
        raise
    return user_envelope(user)


@router.post("/favorite")
async def post_favorite(
    body: AddFavoriteRequest,
    user: User = Depends(get_current_user),
    store: UserStore = Depends(get_user_store),
):
    user = await add_favorite(store, user, body.route.id, body.route.tags)
    return user_envelope(user)


@router.delete("/favorite")
async def delete_favorite(
    body: RemoveFavoriteRequest,
    user: User = Depends(get_current_user),
    store: UserStore = Depends(get_user_store),
):
    user = await remove_favorite(store, user, body.route.id)
    return user_envelope(user)
