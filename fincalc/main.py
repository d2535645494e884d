"""
Main FastAPI application entry point.
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fincalc.config import get_settings
from fincalc.api import router as api_router
from fincalc.calculations.errors import CalculationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Deterministic financial calculators: TVM, growth, loans, pricing and tax",
    version="0.1.0",
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(CalculationError)
async def calculation_error_handler(request: Request, exc: CalculationError):
    """Reject a calculation with every message it produced."""
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.errors, "error": exc.kind},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": "0.1.0"}


def run():
    """Serve the API with uvicorn."""
    uvicorn.run(
        "fincalc.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
