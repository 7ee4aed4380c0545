# api/app.py
import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import routes_foods, routes_orders, routes_users
from core.config import Settings, load_settings
from core.context import AppContext
from core.errors import (
    AccessDeniedError,
    BigBiteError,
    InvalidTransitionError,
    NotFoundError,
    OrderReadOnlyError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first; anything else derived from BigBiteError is a 400
ERROR_STATUS = (
    (AccessDeniedError, 403),
    (NotFoundError, 404),
    (OrderReadOnlyError, 400),
    (InvalidTransitionError, 400),
    (ValidationError, 400),
)


def status_for(exc: BigBiteError) -> int:
    for cls, code in ERROR_STATUS:
        if isinstance(exc, cls):
            return code
    return 400


async def handle_service_error(request: Request, exc: BigBiteError):
    code = status_for(exc)
    logger.info("%s %s -> %d: %s", request.method, request.url.path, code, exc.message)
    return JSONResponse(status_code=code, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


async def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Settings = None, context: AppContext = None) -> FastAPI:
    """Build the API around one AppContext (settings + session factory + mailer)."""
    if context is None:
        context = AppContext.from_settings(settings or load_settings())
    settings = context.settings

    app = FastAPI(title=f"{settings.app_name} API", version="1.0.0")
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BigBiteError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)

    app.include_router(routes_orders.router)
    app.include_router(routes_foods.router)
    app.include_router(routes_users.router)

    @app.get("/")
    def root():
        return {"service": f"{settings.app_name} API", "status": "ok"}

    return app
