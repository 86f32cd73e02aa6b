"""
Route Search Gateway

Entry point for hiking route searches. Lookups by relation id always go to
the provider; area searches go through the GeoQueryCache first and fill it
after a successful provider call.
"""

import logging
from typing import Any, Protocol

from app.services.geo_cache import AreaQuery, GeoQueryCache
from app.services.overpass import build_area_query, build_relation_query

logger = logging.getLogger(__name__)


class RouteSearchProvider(Protocol):
    async def execute(self, query: str) -> Any:
        ...


class RouteSearchGateway:
    def __init__(self, provider: RouteSearchProvider, cache: GeoQueryCache):
        self.provider = provider
        self.cache = cache

    async def search_by_id(self, route_id: int) -> Any:
        """Fetch one hiking route relation. Raises ProviderError on failure."""
        return await self.provider.execute(build_relation_query(route_id))

    async def search_by_area(self, query: AreaQuery) -> Any:
        """
        Fetch hiking routes around a point, serving repeated searches from cache.

        A failed provider call raises ProviderError and leaves the cache
        empty for that key, so the next identical search tries again.
        """
        key = query.cache_key
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Track cache hit for {key}")
            return cached

        data = await self.provider.execute(build_area_query(query))
        self.cache.put(key, data)
        logger.info(f"Cached track search {key}")
        return data
