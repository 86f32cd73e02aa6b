"""
Main Application Entry Point

This module sets up the FastAPI application with:
- Database initialization on startup
- The track search gateway and its result cache
- CORS, rate limiting and JSON error handlers
- Route registration

Run locally with:
    python -m app.main
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.database import close_engine, init_models
from app.errors import register_error_handlers
from app.limiter import limiter
from app.routes import auth, profile, tracks
from app.services.geo_cache import GeoQueryCache
from app.services.overpass import OverpassProvider
from app.services.tracks import RouteSearchGateway


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_route_gateway() -> RouteSearchGateway:
    """Build the gateway with a fresh, empty cache for this process."""
    return RouteSearchGateway(OverpassProvider(settings.OVERPASS_URL), GeoQueryCache())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager - runs on startup and shutdown.

    Startup tasks:
    - Create database tables if they don't exist
    - Create the route search gateway; its cache lives as long as the process
    """
    # STARTUP: Create database tables
    await init_models()

    app.state.route_gateway = create_route_gateway()
    logger.info(f"Hiking routes API started ({settings.ENVIRONMENT})")

    yield

    # SHUTDOWN: release pooled database connections
    await close_engine()


# Create FastAPI application instance
app = FastAPI(title="Hiking Routes API", lifespan=lifespan)

# Allow all domains by default (browser and mobile clients)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"response": f"Too many requests: {exc.detail}", "success": False},
    )


register_error_handlers(app)

# Register route modules
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(tracks.router)


def run():
    """Start the server on HOST:PORT (PORT defaults to 8080)."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
