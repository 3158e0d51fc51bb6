import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api.routes import graphql as graphql_routes
from .api.routes import rest as rest_routes
from .api.routes.preflight import router as preflight_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .integrations.deepseek_client import DeepSeekClient


log = logging.getLogger("proxy.main")


def create_app(
    settings: Settings | None = None,
    *,
    deepseek_client: DeepSeekClient | None = None,
) -> FastAPI:
    """Build the proxy application.

    Routes, matched on exact path and method:
    - ``GET`` and ``POST <graphql_path>``: GraphQL
    - ``OPTIONS`` on any path: CORS preflight
    - ``POST <rest_path>``: legacy REST chat
    Anything else is an empty 404 (no 405s).
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    owns_client = deepseek_client is None
    client = deepseek_client or DeepSeekClient(
        base_url=settings.deepseek_base_url,
        timeout_s=settings.deepseek_timeout_s,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # an injected client belongs to the caller
        if owns_client:
            await client.aclose()

    app = FastAPI(
        title="DeepSeek Chat Proxy",
        version=__version__,
        lifespan=lifespan,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.deepseek_client = client

    app.include_router(graphql_routes.build_router(settings))
    app.include_router(preflight_router)
    app.include_router(rest_routes.build_router(settings.rest_path))

    @app.exception_handler(StarletteHTTPException)
    async def _not_found(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code in (404, 405):
            return Response(status_code=404)
        return await http_exception_handler(request, exc)

    if not settings.deepseek_api_key:
        log.warning("DEEPSEEK_API_KEY is not set; chat requests will fail with MISSING_API_KEY")
    log.info(
        "Routes: GraphQL=%s REST=%s allowed_origins=%s",
        settings.graphql_path,
        settings.rest_path,
        ",".join(settings.allowed_origins),
    )
    return app


app = create_app()
