"""Signup, signin, token authentication and the profile endpoints.

Invariants:
    - Any token not belonging to a user is rejected with 401, including ""
    - Access tokens are only returned by signup and signin
    - Short passwords are rejected before anything is written
"""

import asyncio
import time

import pytest
from sqlalchemy.future import select

from app.dependencies import get_user_store
from app.errors import StoreError, Unauthenticated
from app.main import app
from app.models import User
from app.services.auth import authenticate, sign_up
from app.services.security import hash_password, verify_password
from app.services.users import UserStore


async def test_signup_returns_token(signup):
    body = await signup(username="al", password="abcde", email="a@a.com")
    assert body["username"] == "al"
    assert body["email"] == "a@a.com"
    assert isinstance(body["userId"], int)
    assert len(body["accessToken"]) == 256


async def test_signup_tokens_are_distinct_per_user(signup):
    first = await signup(username="al")
    second = await signup(username="bo")
    assert first["accessToken"] != second["accessToken"]


async def test_signup_short_password_creates_nothing(client, test_db):
    res = await client.post("/signup", json={"username": "al", "password": "ab", "email": "a@a.com"})

    assert res.status_code == 400
    assert res.json() == {"response": "Password must be at least 5 characters long", "success": False}
    result = await test_db.execute(select(User))
    assert result.scalars().all() == []


async def test_signup_duplicate_username_is_rejected(client, signup):
    await signup(username="al", email="a@a.com")
    res = await client.post("/signup", json={"username": "al", "password": "abcde", "email": "b@b.com"})
    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_signup_missing_field_is_rejected(client):
    res = await client.post("/signup", json={"username": "al", "password": "abcde"})
    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_signup_stores_hashed_password(client, signup, test_db):
    await signup(username="al", password="secret-pw")
    user = (await test_db.execute(select(User))).scalars().first()
    assert user.password != "secret-pw"
    assert await verify_password("secret-pw", user.password)


async def test_signin_returns_same_token(client, signup):
    created = await signup(username="al", password="abcde")

    res = await client.post("/signin", json={"username": "al", "password": "abcde"})

    assert res.status_code == 200
    assert res.json() == {
        "response": {
            "userId": created["userId"],
            "username": "al",
            "accessToken": created["accessToken"],
        },
        "success": True,
    }


@pytest.mark.parametrize("username,password", [("al", "wrong"), ("nobody", "abcde")])
async def test_signin_mismatch_returns_404(client, signup, username, password):
    await signup(username="al", password="abcde")
    res = await client.post("/signin", json={"username": username, "password": password})
    assert res.status_code == 404
    assert res.json() == {"response": "Username or password doesn't match", "success": False}


async def test_authenticate_resolves_token(store):
    user = await sign_up(store, "al", "abcde", "a@a.com")
    assert (await authenticate(store, user.access_token)).id == user.id


@pytest.mark.parametrize("token", [None, "", "not-a-token"])
async def test_authenticate_rejects_unknown_tokens(store, token):
    await sign_up(store, "al", "abcde", "a@a.com")
    with pytest.raises(Unauthenticated):
        await authenticate(store, token)


@pytest.mark.parametrize("headers", [{}, {"Authorization": ""}, {"Authorization": "nope"}])
async def test_profile_requires_valid_token(client, headers):
    res = await client.get("/profile", headers=headers)
    assert res.status_code == 401
    assert res.json() == {"response": "Please, log in", "success": False}


async def test_bearer_prefix_is_not_accepted(client, signup):
    created = await signup()
    res = await client.get("/profile", headers={"Authorization": f"Bearer {created['accessToken']}"})
    assert res.status_code == 401


async def test_store_failure_during_authentication_returns_400(client):
    class BrokenStore:
        async def find_by_token(self, token):
            raise StoreError()

    app.dependency_overrides[get_user_store] = lambda: BrokenStore()

    res = await client.get("/profile", headers={"Authorization": "anything"})

    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_get_profile_hides_credentials(client, signup):
    created = await signup(username="al", email="a@a.com")

    res = await client.get("/profile", headers={"Authorization": created["accessToken"]})

    assert res.status_code == 200
    assert res.json() == {
        "response": {
            "userId": created["userId"],
            "username": "al",
            "email": "a@a.com",
            "favorites": [],
            "profilePicture": None,
        },
        "success": True,
    }
    assert created["accessToken"] not in res.text


async def test_update_profile_picture(client, signup):
    created = await signup()
    headers = {"Authorization": created["accessToken"]}

    res = await client.post("/profile", json={"profilePicture": "https://img.example/me.png"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["response"]["profilePicture"] == "https://img.example/me.png"

    res = await client.get("/profile", headers=headers)
    assert res.json()["response"]["profilePicture"] == "https://img.example/me.png"


async def test_password_hash_round_trip():
    hashed = await hash_password("abcde")
    assert await verify_password("abcde", hashed)
    assert not await verify_password("abcdf", hashed)
    assert not await verify_password("abcde", "not-a-bcrypt-hash")


async def test_signup_and_signin_with_long_passphrase(client):
    passphrase = "correct horse battery staple " * 3  # 87 bytes, over bcrypt's 72
    res = await client.post("/signup", json={"username": "al", "password": passphrase, "email": "a@a.com"})
    assert res.status_code == 201

    res = await client.post("/signin", json={"username": "al", "password": passphrase})
    assert res.status_code == 200


async def test_password_hashing_does_not_block_event_loop(store):
    gaps = []
    done = asyncio.Event()

    async def ticker():
        last = time.monotonic()
        while not done.is_set():
            await asyncio.sleep(0.01)
            now = time.monotonic()
            gaps.append(now - last)
            last = now

    async def signups():
        for name in ["al", "bo", "cy"]:
            await sign_up(store, name, "abcde", f"{name}@a.com")
        done.set()

    await asyncio.gather(ticker(), signups())

    assert gaps
    assert max(gaps) < 0.2


async def test_profile_save_failure_returns_400_and_keeps_picture(client, signup, test_db):
    created = await signup()
    headers = {"Authorization": created["accessToken"]}
    await client.post("/profile", json={"profilePicture": "old.png"}, headers=headers)

    class FailingSaveStore(UserStore):
        async def save(self, user):
            raise StoreError("Could not save changes")

    failing = FailingSaveStore(test_db)
    app.dependency_overrides[get_user_store] = lambda: failing

    res = await client.post("/profile", json={"profilePicture": "new.png"}, headers=headers)

    assert res.status_code == 400
    assert res.json() == {"response": "Could not save changes", "success": False}
    # Same session, so this is the instance the route handler changed
    user = await failing.find_by_token(created["accessToken"])
    assert user.profile_picture == "old.png"
