"""Application entrypoint for the LinkReach API."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkreach.api.v1.router import get_api_router
from linkreach.core.config import Config, get_config
from linkreach.core.exceptions import LinkReachException, UpstreamServiceError
from linkreach.core.startup import bootstrap
from linkreach.database.db import Database
from linkreach.integrations.people_search import PeopleSearchClient
from linkreach.integrations.profile_scraper import ProfileScraperClient
from linkreach.llm.client import LLMClient
from linkreach.schemas.common import fail

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UpstreamServiceError)
    async def upstream_error(request: Request, exc: UpstreamServiceError) -> JSONResponse:
        logger.error(
            "api.upstream_failed",
            extra={
                "event": "api.upstream_failed",
                "provider": exc.provider,
                "path": request.url.path,
                "error": exc.message,
            },
        )
        return JSONResponse(status_code=exc.status_code, content=fail(exc.message, exc.details))

    @app.exception_handler(LinkReachException)
    async def domain_error(request: Request, exc: LinkReachException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "api.request_failed",
                extra={"event": "api.request_failed", "path": request.url.path, "error": exc.message},
            )
        return JSONResponse(status_code=exc.status_code, content=fail(exc.message or "Request failed", exc.details))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=fail("Validation failed", exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=fail(str(exc.detail)))

    @app.exception_handler(SQLAlchemyError)
    async def database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        if isinstance(exc, IntegrityError):
            return JSONResponse(status_code=409, content=fail("Conflicting record already exists"))
        logger.error(
            "api.database_failed",
            extra={"event": "api.database_failed", "path": request.url.path, "error": type(exc).__name__},
        )
        return JSONResponse(status_code=500, content=fail("Database error", type(exc).__name__))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "api.unhandled_error",
            exc_info=exc,
            extra={"event": "api.unhandled_error", "path": request.url.path},
        )
        return JSONResponse(status_code=500, content=fail("Internal server error"))


def create_app(
    config: Config | None = None,
    database: Database | None = None,
    llm_client: LLMClient | None = None,
    people_search: PeopleSearchClient | None = None,
    profile_scraper: ProfileScraperClient | None = None,
) -> FastAPI:
    """Create the FastAPI application with its collaborators attached to ``app.state``."""
    cfg = config or get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.state.config = cfg
    app.state.database = database or Database(cfg.DATABASE_URL)
    app.state.llm_client = llm_client or LLMClient(cfg)
    app.state.people_search = people_search or PeopleSearchClient(cfg)
    app.state.profile_scraper = profile_scraper or ProfileScraperClient(cfg)

    _register_exception_handlers(app)
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


def run() -> None:
    """Console entry point: bootstrap the schema and serve the API."""
    cfg = get_config()
    database = Database(cfg.DATABASE_URL)
    bootstrap(database, cfg)
    uvicorn.run(create_app(config=cfg, database=database), host=cfg.API_HOST, port=cfg.API_PORT)


if __name__ == "__main__":
    run()
