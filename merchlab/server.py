# server.py
import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from merchlab import __version__
from merchlab import signups, suggestions, teelab
from merchlab.catalog import ShopifyCatalog
from merchlab.copywriter import GeminiCopywriter
from merchlab.db import build_engine, build_session_maker, create_tables
from merchlab.errors import MerchLabError, ValidationError
from merchlab.settings import Settings, settings as default_settings
from merchlab.store import DesignStore

# --- Logging Configuration ---
logging.basicConfig(
    level=default_settings.LOG_LEVEL.upper(),
    format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the API.

    Startup checks the required credentials, connects to the store and
    creates the tables. Any failure there aborts startup, so uvicorn exits
    instead of serving a half-configured app.
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings.validate_required()

        engine = build_engine(app_settings)
        try:
            await create_tables(engine)
        except Exception as e:
            log.critical(f"Database error: {e}")
            await engine.dispose()
            raise
        log.info("Connected to database.")

        app.state.store = DesignStore(build_session_maker(engine))
        app.state.catalog = ShopifyCatalog(app_settings)
        app.state.copywriter = GeminiCopywriter(app_settings)
        try:
            yield
        finally:
            await app.state.catalog.aclose()
            await engine.dispose()
            log.info("Shutdown complete.")

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Marketing API for the storefront: GiftGenie, TeeLab, style suggestions and signups.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # --- Error envelope ---
    @app.exception_handler(MerchLabError)
    async def merchlab_error_handler(request: Request, exc: MerchLabError):
        """Logs the failure with its context and returns only the public message."""
        context = f"{request.method} {request.url.path}"
        if isinstance(exc, ValidationError):
            log.warning(f"[{exc.kind}] {context} rejected: {exc.message} {exc.details}")
        else:
            log.error(f"[{exc.kind}] {context} failed: {exc.details}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        """Anything no layer translated still gets the JSON envelope, never a traceback."""
        log.exception(
            f"[unexpected] {request.method} {request.url.path} failed: "
            f"{type(exc).__name__}: {exc}"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error"},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        log.warning(f"[validation] {request.method} {request.url.path} rejected: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    # --- CORS Middleware ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Routers ---
    app.include_router(suggestions.router)
    app.include_router(teelab.router)
    app.include_router(signups.router)

    # --- Uploaded design images ---
    os.makedirs(app_settings.UPLOAD_DIR, exist_ok=True)
    app.mount(teelab.UPLOADS_PATH, StaticFiles(directory=app_settings.UPLOAD_DIR), name="uploads")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    log.info(f"Server running on port {default_settings.PORT}")
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    main()
