"""The Ordnery FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:create_app --factory --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from catalogue.api import admin_product_router
from catalogue.domain import catalogue
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.api import admin_router, user_router
from identity.domain import identity
from notifications.channel import build_email_channel
from notifications.dispatcher import NotificationDispatcher
from ordering.api import admin_order_router, order_router, user_order_router
from ordering.domain import ordering
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.config import get_settings
from shared.errors import OrdneryError
from shared.logging import add_context, clear_context

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
# Matched longest prefix first: order history lives under /api/users and the
# admin console spans all three domains.
_ROUTE_DOMAIN_MAP = {
    "/api/users/orders": ordering,
    "/api/users": identity,
    "/api/orders": ordering,
    "/api/admin/products": catalogue,
    "/api/admin/orders": ordering,
    "/api/admin/dashboard": ordering,
    "/api/admin": identity,
}
_PREFIXES = sorted(_ROUTE_DOMAIN_MAP, key=len, reverse=True)


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix in _PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return _ROUTE_DOMAIN_MAP[prefix]
    return None


# ---------------------------------------------------------------------------
# Error responses
# ---------------------------------------------------------------------------
def _error(status_code: int, message: str, errors=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "errors": errors},
    )


def _first_message(messages: dict) -> str:
    for value in messages.values():
        if isinstance(value, list | tuple) and value:
            return str(value[0])
        if value:
            return str(value)
    return "Invalid input"


async def _validation_error(request: Request, exc: ValidationError):
    return _error(400, _first_message(exc.messages or {}), exc.messages)


async def _request_validation_error(request: Request, exc: RequestValidationError):
    errors = {".".join(str(p) for p in err["loc"][1:]) or "body": [err["msg"]] for err in exc.errors()}
    return _error(400, _first_message(errors), errors)


async def _not_found(request: Request, exc: ObjectNotFoundError):
    message = getattr(exc, "messages", None) or (exc.args[0] if exc.args else None)
    if not isinstance(message, str):
        message = "Not found"
    return _error(404, message)


async def _application_error(request: Request, exc: OrdneryError):
    return _error(exc.status_code, exc.message)


async def _unhandled(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return _error(500, "Internal server error")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
@asynccontextmanager
async def _lifespan(app: FastAPI):
    if not app.state.dispatcher.email_channel.verify():
        logger.warning("Email channel unavailable; notifications will fail until it recovers")
    yield
    app.state.dispatcher.shutdown(wait_for_pending=True)


def create_app(dispatcher: NotificationDispatcher | None = None, initialize: bool = True) -> FastAPI:
    """Build the application.

    ``dispatcher`` defaults to one backed by the email channel the settings
    select. Pass ``initialize=False`` when the domains were already
    initialized, as the test suite does.
    """
    if initialize:
        identity.init()
        catalogue.init()
        ordering.init()

    settings = get_settings()
    if dispatcher is None:
        dispatcher = NotificationDispatcher(build_email_channel(settings), settings)

    app = FastAPI(
        title="The Ordnery API",
        description="Storefront ordering: Identity, Catalogue & Ordering domains",
        lifespan=_lifespan,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url] if settings.frontend_url else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match, pass through (health check, docs, etc.)
        return await call_next(request)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Tag every log line of a request with its ID, method and path."""
        clear_context()
        add_context(request_id=uuid4().hex[:12], method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(OrdneryError, _application_error)
    app.add_exception_handler(Exception, _unhandled)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(user_order_router)
    app.include_router(user_router)
    app.include_router(admin_product_router)
    app.include_router(admin_order_router)
    app.include_router(admin_router)
    app.include_router(order_router)

    @app.get("/api/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domains": {
                    "identity": {"name": identity.name},
                    "catalogue": {"name": catalogue.name},
                    "ordering": {"name": ordering.name},
                },
            }
        )

    return app
