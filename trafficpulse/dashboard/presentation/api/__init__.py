"""
API package.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from omegaconf import DictConfig

from .... import __version__
from ....common.config import ConfigManager
from ....common.exceptions import (
    AuthenticationError, DuplicateCenterError, InvalidInputError,
    MalformedRecordError, StoreError
)
from ....common.logging import configure_logging, setup_logger
from ...application.builder import DashboardBuilder, DashboardServices
from .routes import admins, centers, dashboard, meta

logger = setup_logger("trafficpulse.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: DashboardServices = app.state.services
    try:
        try:
            services.database.connect()
            if app.state.config.database.create_tables:
                services.database.init_schema()
        except StoreError:
            logger.critical("Store initialization failed; refusing to start", exc_info=True)
            raise
        yield
    finally:
        services.database.close()


def _validation_field(loc) -> str:
    # ("body", "centerID") -> "centerID"; ("body", 3) for undecodable JSON -> "body"
    names = [str(part) for part in loc[1:] if isinstance(part, str)]
    return ".".join(names) or (str(loc[0]) if loc else "body")


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse({"error": exc.message, "field": exc.field}, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        return JSONResponse(
            {"error": first.get("msg", "Invalid request"), "field": _validation_field(tuple(first.get("loc", ())))},
            status_code=400,
        )

    @app.exception_handler(MalformedRecordError)
    async def malformed_record_handler(request: Request, exc: MalformedRecordError):
        return JSONResponse(
            {"error": str(exc), "centerId": exc.center_id, "field": exc.field},
            status_code=422,
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(
            {"error": str(exc)},
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DuplicateCenterError)
    async def duplicate_center_handler(request: Request, exc: DuplicateCenterError):
        return JSONResponse({"error": str(exc)}, status_code=409)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        # Details stay server-side
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse({"message": "Something went wrong!"}, status_code=500)


def create_app(config: Optional[DictConfig] = None, services: Optional[DashboardServices] = None) -> FastAPI:
    """
    Builds the API. Services are built from config unless injected.
    """
    config = config if config is not None else ConfigManager().load_app_config()
    configure_logging(config.logging.level)

    if services is None:
        services = DashboardBuilder(config).build()

    app = FastAPI(
        title="TrafficPulse API",
        version=__version__,
        description="Accident, violation and challan statistics per enforcement center.",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = config.server.api_prefix.rstrip("/")
    app.include_router(centers.router, prefix=prefix)
    app.include_router(dashboard.router, prefix=prefix)
    app.include_router(admins.router, prefix=prefix)
    app.include_router(meta.router)

    register_exception_handlers(app)
    return app
