"""
API Routes Package

This package contains FastAPI route handlers for the application.
Each module defines routes for a specific feature area:

- auth.py: Account routes (signup, signin)
- profile.py: Profile and favorites routes (require an access token)
- tracks.py: Hiking route search (by relation id and around a point)

Routes are registered in main.py using FastAPI's router system.
"""
