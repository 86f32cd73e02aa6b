"""
Hiking Routes API Package

JSON API for finding hiking routes near a point and keeping a personal list
of favorite routes. The package is organized as follows:

- config.py: Application configuration and environment settings
- database.py: Database connection and session management
- dependencies.py: FastAPI dependency injection functions
- errors.py: Typed API errors and their JSON handlers
- limiter.py: Rate limiting configuration
- main.py: FastAPI application entry point
- models.py: SQLAlchemy ORM database models
- schemas.py: Request/response bodies

Subpackages:
- routes/: API route handlers (auth, profile, tracks)
- services/: Business logic (auth, users, favorites, geo cache, Overpass client)
"""
