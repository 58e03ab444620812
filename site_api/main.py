from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .endpoints import ROUTERS, assets
from .exceptions.api_exception import APIException
from .exceptions.contact import MethodNotAllowedError
from .logger import get_logger
from .services.asset_cache import AssetCacheWorker
from .services.contact import ContactHandler
from .settings import Settings, settings


logger = get_logger(__name__)


def setup_sentry(config: Settings) -> None:
    import sentry_sdk

    logger.debug("initializing sentry")
    sentry_sdk.init(
        dsn=config.sentry_dsn,
        environment=config.sentry_environment,
        release=f"site-api@{__version__}",
        traces_sample_rate=0.0,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    worker: AssetCacheWorker | None = getattr(app.state, "asset_worker", None)
    if worker is None:
        yield
        return

    # a failed install aborts startup
    await worker.install()
    try:
        yield
    finally:
        await worker.aclose()


def create_app(config: Settings = settings) -> FastAPI:
    app = FastAPI(
        title="site-api",
        version=__version__,
        debug=config.debug,
        lifespan=lifespan,
        openapi_tags=[{"name": name, "description": doc} for name, (_, doc) in ROUTERS.items()],
    )

    for router, _ in ROUTERS.values():
        app.include_router(router, prefix="/api")

    app.state.contact_handler = ContactHandler.from_settings(config)

    if config.asset_cache_enabled:
        app.state.asset_worker = AssetCacheWorker.create(config)
        app.include_router(assets.router)

    if config.sentry_dsn:
        setup_sentry(config)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        detail = str(exc.detail)
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and not isinstance(exc, APIException):
            detail = MethodNotAllowedError.detail
        return PlainTextResponse(detail, exc.status_code, headers=exc.headers)

    return app


app = create_app()
