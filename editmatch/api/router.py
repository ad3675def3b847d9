"""
EditMatch — Main API Router

Aggregates all sub-routers under a single prefix so that ``editmatch.main``
can mount the entire API surface with one ``include_router`` call.
"""

from fastapi import APIRouter

from editmatch.api import niches, recommendations, selections

router = APIRouter()

router.include_router(recommendations.router, prefix="/recommendations", tags=["Recommendations"])
router.include_router(selections.router, prefix="/selections", tags=["Selections"])
router.include_router(niches.router, prefix="/niches", tags=["Niches"])
