"""StayHub booking service — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stayhub.api.v1.bookings import router as bookings_router
from stayhub.api.v1.filters import router as filters_router
from stayhub.clients.apartments import ApartmentClient
from stayhub.clients.http import build_http_client
from stayhub.clients.users import UserClient
from stayhub.config import settings
from stayhub.exceptions import StayHubError

# Configure root logger so all stayhub.* loggers output to stderr (captured by Docker).
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the remote service clients on startup, close them and the engine on shutdown."""
    app.state.apartment_client = ApartmentClient(
        build_http_client(settings.apartment_service_url, settings.http_timeout_seconds)
    )
    app.state.user_client = UserClient(build_http_client(settings.user_service_url, settings.http_timeout_seconds))
    yield
    await app.state.apartment_client.aclose()
    await app.state.user_client.aclose()

    from stayhub.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Bookings and pricing filters for the StayHub apartment rental platform.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers
@app.exception_handler(StayHubError)
async def stayhub_error_handler(request: Request, exc: StayHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Field-level validation failures are client errors: 400, not 422."""
    errors = jsonable_encoder(exc.errors())
    message = errors[0]["msg"] if errors else "Request validation failed"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message, "errors": errors},
    )


# Routers
app.include_router(bookings_router)
app.include_router(filters_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
