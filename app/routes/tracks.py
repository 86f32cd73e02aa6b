"""
Track Search Routes

Public hiking route search backed by the Overpass API:
- GET /tracks/{id}: one route relation by id
- GET /tracks?radius=&lat=&long=: routes around a point (cached)

Responses use {"response": {"data": ...}, "status": "success"}; provider
failures return 500 with {"response": {"error": ..., "status": "error"}}.
"""

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_route_gateway
from app.schemas import tracks_envelope
from app.services.geo_cache import normalize_area_query
from app.services.tracks import RouteSearchGateway


router = APIRouter(prefix="/tracks", tags=["tracks"])


@router.get("/{route_id}")
async def get_track(
    route_id: int,
    gateway: RouteSearchGateway = Depends(get_route_gateway),
):
    data = await gateway.search_by_id(route_id)
    return tracks_envelope(data)


@router.get("")
async def search_tracks(
    radius: str | None = Query(None, description="Search radius in meters, capped at 10000"),
    lat: str | None = Query(None),
    long: str | None = Query(None),
    gateway: RouteSearchGateway = Depends(get_route_gateway),
):
    # Raw strings: defaults and the radius cap live in normalize_area_query
    query = normalize_area_query(radius, lat, long)
    data = await gateway.search_by_area(query)
    return tracks_envelope(data)
