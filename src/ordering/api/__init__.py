"""Ordering API package: routers plus the application factory."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from ordering.api.routes import cart_router, history_router, item_router
from ordering.domain import ordering
from ordering.errors import CartError
from ordering.utils.logging import bind_request_context, clear_request_context, configure_logging

logger = structlog.get_logger(__name__)

__all__ = ["cart_router", "history_router", "item_router", "create_app"]


@asynccontextmanager
async def _lifespan(app: FastAPI):
    configure_logging()
    yield


def _error(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"kind": kind, "message": message})


def create_app(domain=ordering) -> FastAPI:
    """Build the HTTP application around an initialized domain."""
    app = FastAPI(
        title="Cartline API",
        description="Shopping cart, checkout and order history",
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        bind_request_context(method=request.method, path=request.url.path)
        try:
            with domain.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    @app.exception_handler(CartError)
    async def cart_error_handler(request: Request, exc: CartError):
        if exc.status_code >= 500:
            logger.error("Cart operation failed upstream", kind=exc.kind, error=exc.message)
        return _error(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        return _error(400, "invalid_input", f"Malformed request: {', '.join(fields)}")

    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        return _error(400, "invalid_input", str(exc.messages))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", error_type=type(exc).__name__)
        return _error(500, "internal", "Internal server error")

    app.include_router(cart_router)
    app.include_router(history_router)
    app.include_router(item_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
