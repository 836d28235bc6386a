# src/askit/main.py
"""Main entry point for the AskIt application."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from askit.api.responses import SuccessResponse, register_exception_handlers, success
from askit.api.v1 import ROUTERS
from askit.core.logging import configure_logging
from askit.core.settings import settings

configure_logging()

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Forum-style questions and answers for course communities",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
for router in ROUTERS:
    app.include_router(router, prefix="/api/v1")


@app.get("/health", response_model=SuccessResponse[dict[str, str]])
def health_check() -> SuccessResponse[dict[str, str]]:
    """Health check endpoint to verify the service is running."""
    return success({"status": "ok"})


@app.get("/", response_model=SuccessResponse[dict[str, str]])
def root() -> SuccessResponse[dict[str, str]]:
    """Root endpoint with basic information about the API."""
    return success({
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    })


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("askit.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
