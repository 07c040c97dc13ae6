"""
AssetVerse application entry point
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assetverse.core import auth_routes
from assetverse.core.config import settings
from assetverse.core.exceptions import AppError
from assetverse.modules.affiliations import api as affiliations_api
from assetverse.modules.assets import api as assets_api
from assetverse.modules.assignments import api as assignments_api
from assetverse.modules.payments import api as payments_api
from assetverse.modules.requests import api as requests_api
from assetverse.modules.users import api as users_api

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant asset lifecycle API",
    version="1.0.0",
    debug=settings.debug,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "internal"},
    )


# Module routers
app.include_router(auth_routes.router)
app.include_router(users_api.router)
app.include_router(assets_api.router)
app.include_router(requests_api.router)
app.include_router(assignments_api.router)
app.include_router(affiliations_api.router)
app.include_router(payments_api.router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "assetverse", "environment": settings.environment}


@app.on_event("startup")
def on_startup():
    """Creates missing tables and seeds the package catalogue."""
    logger.info(f"Starting {settings.app_name} ({settings.environment})...")

    if settings.auto_create_tables:
        from assetverse.core.database import Base, engine
        from assetverse.models import load_all_models

        load_all_models()
        Base.metadata.create_all(bind=engine)

    if settings.seed_packages_enabled:
        from assetverse.core.database import SessionLocal
        from assetverse.modules.payments.services.payments import seed_default_packages

        db = SessionLocal()
        try:
            seed_default_packages(db)
        finally:
            db.close()

    logger.info(f"{settings.app_name} started")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
