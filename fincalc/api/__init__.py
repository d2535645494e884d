"""
API routes for the financial calculators.
"""

from fastapi import APIRouter

from fincalc.api import calculations, growth, pricing, tax

router = APIRouter()

# Every calculator lives under /api/calculate
router.include_router(calculations.router, prefix="/calculate", tags=["loans"])
router.include_router(growth.router, prefix="/calculate", tags=["growth"])
router.include_router(pricing.router, prefix="/calculate", tags=["pricing"])
router.include_router(tax.router, prefix="/calculate", tags=["tax"])
