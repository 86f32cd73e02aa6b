"""
Password Hashing Service

Thin wrapper around bcrypt. Every hash gets a fresh salt, and the salt is
stored inside the hash string, so verification only needs the stored value.

bcrypt is deliberately slow (a few hundred milliseconds per call), so both
operations run in a worker thread and never stall the event loop.
"""

import asyncio

import bcrypt


# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


async def hash_password(password: str) -> str:
    """Hash a plain-text password with a freshly generated salt."""
    def _hash_sync():
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")

    return await asyncio.to_thread(_hash_sync)


async def verify_password(password: str, hashed: str) -> bool:
    """
    Check a plain-text password against a stored bcrypt hash.

    Returns False instead of raising when the stored value is not a valid
    bcrypt hash, so a corrupt row behaves like a wrong password.
    """
    def _check_sync():
        try:
            return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
        except ValueError:
            return False

    return await asyncio.to_thread(_check_sync)
