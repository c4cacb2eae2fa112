import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.features.health.routes.health import router as health_router
from app.features.waitlist.routes.waitlist import router as waitlist_router
from app.platform.config import settings
from app.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

API_VERSION = "1.0.0"


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Waitlist signup collection backed by Google Sheets",
        version=API_VERSION,
        debug=settings.DEBUG,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Collects waitlist signups into a spreadsheet.",
            "version": API_VERSION,
            "docs_url": "/docs",
        }

    # Origin policy is static configuration, see Settings.get_allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )

    add_exception_handlers(app)

    app.include_router(waitlist_router)
    app.include_router(health_router)

    return app


app = create_app()
