import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from showbook.api.v1 import routes_admin, routes_booking, routes_health, routes_show
from showbook.core.config import Settings, get_settings
from showbook.core.exceptions import ShowbookError
from showbook.core.locks import ShowLocks
from showbook.crud.booking import CRUDBooking
from showbook.core.logging_setup import setup_logging
from showbook.scripts import seed_data
from showbook.storage import Storage, build_show_locks, build_storage


logger = logging.getLogger(__name__)


def create_app(
        settings: Optional[Settings] = None,
        storage: Optional[Storage] = None,
        show_locks: Optional[ShowLocks] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.storage = storage or build_storage(settings)
        app.state.show_locks = show_locks or build_show_locks(settings)
        if settings.STORAGE_BACKEND == "database" and storage is None and settings.ENV == "development":
            from showbook.db.session import init_db
            await init_db()
        if settings.SEED_ON_STARTUP:
            await seed_data.seed_if_empty(app.state.storage)
        logger.info("%s started with %s storage and %s show locks",
                    settings.PROJECT_NAME, type(app.state.storage).__name__, type(app.state.show_locks).__name__)
        yield
        await app.state.show_locks.close()
        await app.state.storage.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.allocator = CRUDBooking(settings.REJECT_SEATS_WITHOUT_SEAT_MODEL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        routes_health.router,
        prefix=settings.API_V1_PREFIX
    )
    app.include_router(
        routes_show.router,
        prefix=settings.API_V1_PREFIX
    )
    app.include_router(
        routes_booking.router,
        prefix=settings.API_V1_PREFIX
    )
    app.include_router(
        routes_admin.router,
        prefix=settings.API_V1_PREFIX
    )

    @app.exception_handler(ShowbookError)
    async def showbook_error_handler(request: Request, ex: ShowbookError):
        return JSONResponse(status_code=ex.status_code, content={"error": ex.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, ex: Exception):
        logger.error("unhandled error on %s %s: %s", request.method, request.url.path, ex, exc_info=ex)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/")
    async def root():
        return {"message": "Showbook backend is running"}

    return app


app = create_app()
