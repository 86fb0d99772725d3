"""
Top‑level router for version 1 of the API.

This router aggregates the exchange, submission and vote routers under
``/exchanges`` and the service information under ``/info``.  When new
endpoints are added, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import exchanges, info, submissions, votes

router = APIRouter()

router.include_router(exchanges.router, prefix="/exchanges", tags=["exchanges"])
# Submission and vote routes define their own "/{exchange_id}/..." paths
# below the shared exchanges prefix.
router.include_router(submissions.router, prefix="/exchanges", tags=["submissions"])
router.include_router(votes.router, prefix="/exchanges", tags=["votes"])
router.include_router(info.router, prefix="/info", tags=["info"])
