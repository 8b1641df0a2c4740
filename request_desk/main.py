from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.desk import Desk, build_desk
from .core.errors import AuthenticationError, DependentEntitiesError, DeskError
from .core.settings import settings
from .routers import accounts, auth, departments, employees, health, me, navigation, requests

logger = logging.getLogger(__name__)

PERSISTENCE_WARNING_HEADER = "X-Persistence-Warning"


def create_app(desk: Desk | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "desk", None) is None:
            app.state.desk = build_desk()
        yield

    app = FastAPI(title="Request Desk API", lifespan=lifespan)
    app.state.desk = desk

    @app.exception_handler(DeskError)
    async def desk_error_handler(request: Request, exc: DeskError):
        body = {"detail": exc.detail, "error": exc.code}
        if isinstance(exc, AuthenticationError):
            body["reason"] = exc.reason
        if isinstance(exc, DependentEntitiesError):
            body["count"] = exc.count
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.middleware("http")
    async def persistence_warnings(request: Request, call_next):
        response = await call_next(request)
        _attach_persistence_warnings(request, response)
        return response

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(me.router)
    app.include_router(accounts.router)
    app.include_router(departments.router)
    app.include_router(employees.router)
    app.include_router(requests.router)
    app.include_router(requests.admin_router)
    app.include_router(navigation.router)

    # CORS: allow local dev origins by default.
    allow_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


def _attach_persistence_warnings(request: Request, response) -> None:
    desk = getattr(request.app.state, "desk", None)
    if desk is None:
        return
    warnings = desk.store.drain_warnings()
    if warnings:
        message = "; ".join(str(w) for w in warnings)
        logger.warning("persistence warning: %s", message)
        response.headers[PERSISTENCE_WARNING_HEADER] = message


app = create_app()
