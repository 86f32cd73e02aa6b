"""
Rate Limiting Configuration

This module sets up the slowapi Limiter used on the signup and signin
routes. Counters live in memory by default; point RATE_LIMIT_STORAGE_URI at
Redis when several workers should share them.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from app.config import settings

# key_func=get_remote_address: Uses the client's IP address as the unique identifier
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
