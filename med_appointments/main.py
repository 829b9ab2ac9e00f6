from dotenv import load_dotenv

# Load environment variables as early as possible
load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp

from .core.config import Settings, get_settings
from .application.services.appointments_service import AppointmentsService
from .exceptions import AppointmentValidationError, http_exception_handler, validation_exception_handler
from .infrastructure.persistence.json_file.appointments_repository_json import JsonFileAppointmentsRepository
from .infrastructure.storage.static_assets import StaticAssetResolver
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware, RequestBodyLimitMiddleware, SecurityMiddleware
from .routers import appointments_router, static_router

logger = logging.getLogger(__name__)


class AppointmentsAPI(FastAPI):
    def build_middleware_stack(self) -> ASGIApp:
        # Outermost, so an oversized body never gets an application response
        return RequestBodyLimitMiddleware(
            super().build_middleware_stack(),
            max_body_size=self.state.settings.MAX_BODY_SIZE,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {app.state.settings.APP_NAME}...")
    try:
        await app.state.appointments_repo.ensure_exists()
        logger.info(f"Appointment store ready at {app.state.settings.DATA_FILE}")
    except Exception:
        # Do not crash the app; the store bootstraps again on first access
        logger.exception("Appointment store initialization failed")
    yield
    # Shutdown
    logger.info(f"Shutting down {app.state.settings.APP_NAME}...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )

    app = AppointmentsAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if settings.DOCS_ENABLED else None),
        redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None),
    )

    repo = JsonFileAppointmentsRepository(settings.DATA_FILE)
    app.state.settings = settings
    app.state.appointments_repo = repo
    app.state.appointments_service = AppointmentsService(repo=repo)
    app.state.asset_resolver = StaticAssetResolver(settings.FRONTEND_DIR, index_document=settings.INDEX_DOCUMENT)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppointmentValidationError, validation_exception_handler)

    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)

    # API first: the static router catches every remaining path
    app.include_router(appointments_router.router)
    app.include_router(static_router.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "med_appointments.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level=settings.LOG_LEVEL.lower(),
    )
