"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI

from calculateshub import __version__
from calculateshub.api import router as api_router
from calculateshub.config import get_settings
from calculateshub.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Calculator engine and catalog for financial, business and everyday tools",
    version=__version__,
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")

logger.info("%s started in %s mode", settings.app_name, settings.app_env)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}
