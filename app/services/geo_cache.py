"""
Geo Query Cache - Area Search Normalization and Result Caching

Area searches arrive as loose query parameters (radius in meters, latitude,
longitude). This module turns them into an AreaQuery with defaults applied
and the radius capped, and derives the cache key the results are stored under.

Cache keys quantize coordinates to 2 decimal places (about 1.1 km north-south),
so nearby searches share a result set:

    radius=3000, lat=59.1219, long=18.108  ->  "3000-59.12-18.11"
    radius=3000, lat=59.1241, long=18.1149 ->  "3000-59.12-18.11"

The cache itself is a plain dict owned by one GeoQueryCache instance, created
when the application starts. Entries are never updated, expired or evicted,
so memory grows with the number of distinct keys seen by the process.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from app.errors import ValidationError


DEFAULT_RADIUS = 5000
MAX_RADIUS = 10000  # 10 km radius maximum
DEFAULT_LAT = 59.122
DEFAULT_LONG = 18.108

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class AreaQuery:
    """A normalized "hiking routes around a point" search."""

    radius: float
    lat: float
    long: float

    @property
    def cache_key(self) -> str:
        return f"{format_radius(self.radius)}-{to_fixed_2(self.lat)}-{to_fixed_2(self.long)}"


def normalize_area_query(radius=None, lat=None, long=None) -> AreaQuery:
    """
    Apply defaults and the radius cap to raw area search parameters.

    Missing values (None or empty string) fall back to radius 5000 m and
    the point (59.122, 18.108). A radius above 10000 m (even "Infinity")
    is clamped, never rejected. Coordinates keep their full precision here;
    only the cache key rounds them.

    Raises:
        ValidationError: a value is not a number, or is NaN or infinite
            (only radius may be +Infinity)
    """
    radius_value = _parse_number("radius", radius, DEFAULT_RADIUS, allow_infinity=True)
    return AreaQuery(
        radius=min(radius_value, MAX_RADIUS),
        lat=_parse_number("lat", lat, DEFAULT_LAT),
        long=_parse_number("long", long, DEFAULT_LONG),
    )


def format_radius(radius: float) -> str:
    """Render a radius without a trailing ".0" when it is a whole number."""
    if float(radius).is_integer():
        return str(int(radius))
    return repr(float(radius))


def to_fixed_2(value: float) -> str:
    """
    Format a float with exactly 2 decimals, rounding ties away from zero.

    The rounding is done on the exact binary value of the float, which gives
    the same strings as JavaScript's Number.prototype.toFixed(2). Existing
    clients and logs use keys in that format.
    """
    if value == 0:
        value = 0.0  # no "-0.00"
    return str(Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _parse_number(name: str, raw, default: float, allow_infinity: bool = False) -> float:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return float(default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")
    if value == math.inf and allow_infinity:
        return value
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number")
    return value


class GeoQueryCache:
    """
    Process-local map from area cache key to a provider result.

    get() never calls the provider; put() always overwrites. There is no
    locking: two concurrent misses on one key both fetch and the last put wins.
    """

    def __init__(self):
        self._entries: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached value for key, or None on a miss."""
        return self._entries.get(key)

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
