from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError as DBIntegrityError

from roster.common.logging import get_logger
from roster.common.settings import get_settings
from roster.domain.errors import ConflictError, IntegrityError, NotFoundError
from roster.services.api.routers import health, students, courses, enrollments

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
logger = get_logger("roster.api")


def _error(status: HTTPStatus, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Roster API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Domain errors -> HTTP
    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, exc: NotFoundError):
        return _error(HTTPStatus.NOT_FOUND, exc)

    @app.exception_handler(ConflictError)
    async def _conflict(_: Request, exc: ConflictError):
        return _error(HTTPStatus.CONFLICT, exc)

    @app.exception_handler(IntegrityError)
    async def _integrity(_: Request, exc: IntegrityError):
        logger.info("delete refused: %s", exc)
        return _error(HTTPStatus.CONFLICT, exc)

    # Unique / FK violations that got past the repo checks (concurrent writers)
    @app.exception_handler(DBIntegrityError)
    async def _db_integrity(_: Request, exc: DBIntegrityError):
        logger.warning("database constraint violation: %s", exc.orig)
        return JSONResponse(status_code=HTTPStatus.CONFLICT, content={"detail": str(exc.orig)})

    @app.exception_handler(ValueError)
    async def _invalid(_: Request, exc: ValueError):
        return _error(HTTPStatus.UNPROCESSABLE_ENTITY, exc)

    # Routers
    app.include_router(health.router)
    app.include_router(students.router)
    app.include_router(courses.router)
    app.include_router(enrollments.router)
    return app


app = create_app()
