"""
API routes for the calculator catalog.
"""

from fastapi import APIRouter

from calculateshub.api import calculations, calculators

router = APIRouter()

# Include sub-routers
router.include_router(calculators.router, prefix="/calculators", tags=["calculators"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
