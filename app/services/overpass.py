"""
Overpass API Client - Hiking Route Queries

Builds Overpass QL queries for hiking route relations and runs them against
an Overpass interpreter endpoint. Queries can be tried out on
https://overpass-turbo.eu/.

Both query shapes select relations tagged type=route and route=hiking and
ask for center, tags, geometry and body of every match.
"""

import asyncio
import logging
from decimal import Decimal

import requests

from app.errors import ProviderError
from app.services.geo_cache import AreaQuery, format_radius

logger = logging.getLogger(__name__)


# Server-side timeout in seconds, sent inside the query itself
QUERY_TIMEOUT = 900


def format_coordinate(value: float) -> str:
    """Shortest decimal form of a float, never in scientific notation (1e-05 -> 0.00001)."""
    return format(Decimal(repr(float(value))), "f")


def build_relation_query(route_id: int) -> str:
    """Overpass QL selecting the single hiking route relation with this id."""
    return f"""
[timeout:{QUERY_TIMEOUT}][out:json];
(
rel
  [type=route]
  [route=hiking]
  (id:{int(route_id)});
);
out center tags geom body;
"""


def build_area_query(query: AreaQuery) -> str:
    """Overpass QL selecting hiking route relations within query.radius meters of the point."""
    return f"""
[timeout:{QUERY_TIMEOUT}][out:json];
(
rel
  [type=route]
  [route=hiking]
  (around:{format_radius(query.radius)},{format_coordinate(query.lat)},{format_coordinate(query.long)});
);
out center tags geom body;
"""


class OverpassProvider:
    """
    Runs Overpass QL queries and returns the matched elements.

    requests is blocking, so each call runs in a worker thread and other
    requests keep being served while Overpass is working.
    """

    def __init__(self, url: str):
        self.url = url

    async def execute(self, query: str) -> list[dict]:
        """
        Run a query and return the "elements" list of the response.

        Raises:
            ProviderError: network failure, non-2xx status or unreadable body
        """
        return await asyncio.to_thread(self._execute_sync, query)

    def _execute_sync(self, query: str) -> list[dict]:
        try:
            response = requests.post(self.url, data={"data": query})
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Overpass request failed: {e}")
            raise ProviderError(f"Overpass request failed: {e}")
        except ValueError as e:
            logger.error(f"Overpass returned invalid JSON: {e}")
            raise ProviderError("Overpass returned an invalid response")

        if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
            raise ProviderError("Overpass response has no elements")
        return payload["elements"]
