"""FastAPI application - minimal setup with dependency injection."""
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from finnolan.api.dependencies import init_services
from finnolan.api.routes import alerts, health, insights, market, speech
from finnolan.config import Settings
from finnolan.domain.exceptions import FinnolanError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting application...")

    settings = Settings.from_env()
    logging.getLogger().setLevel(settings.log_level.upper())

    # One HTTP client shared by every provider adapter
    client = httpx.AsyncClient(timeout=settings.http_timeout)
    init_services(settings, client)

    configured = [name for name, ok in settings.configured().items() if ok]
    logger.info(f"Application started; configured providers: {configured}")
    yield

    # Shutdown
    logger.info("Shutting down...")
    await client.aclose()
    logger.info("Shutdown complete")


# Create app
app = FastAPI(
    title="FINNOLAN API",
    description="Financial insights API: quotes, news, AI summaries, recommendations, speech and alerts",
    version="0.1.0",
    lifespan=lifespan,
)

@app.middleware("http")
async def answer_bare_options(request: Request, call_next):
    """Answer OPTIONS without preflight headers with an empty 200.

    Registered before CORS so real preflights are still handled there.
    """
    if request.method == "OPTIONS" and request.url.path.startswith("/api/v1/"):
        return Response(status_code=200)
    return await call_next(request)


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FinnolanError)
async def finnolan_error_handler(request: Request, exc: FinnolanError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.http_status)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse({"error": message}, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


# Register routes
app.include_router(health.router)
app.include_router(market.router)
app.include_router(insights.router)
app.include_router(speech.router)
app.include_router(alerts.router)
