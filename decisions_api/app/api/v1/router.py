"""
Top-level router for version 1 of the API.

When new domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import decisions, elected_officials

router = APIRouter()

router.include_router(decisions.router, prefix="/decisions", tags=["decisions"])
router.include_router(elected_officials.router, prefix="/elected-officials", tags=["elected-officials"])
