"""
REST API main application.
Entry point for the directory admin FastAPI server.
"""

from fastapi import FastAPI

from rest_api.core import lifespan, configure_cors, register_middlewares
from rest_api.routers.admin import router as admin_router
from rest_api.routers.public import health_router
from shared.config.settings import settings


# Create FastAPI application
app = FastAPI(
    title="Directory Admin API",
    description="Version history and recycle bin for the directory admin",
    version="0.1.0",
    lifespan=lifespan,
)

register_middlewares(app)
configure_cors(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(admin_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
