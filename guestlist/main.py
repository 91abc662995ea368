"""Main FastAPI application."""
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from guestlist.api.deps import get_store
from guestlist.api.v1.router import api_router
from guestlist.core.config import settings
from guestlist.core.exceptions import BackendError, SchemaError
from guestlist.core.logging_config import get_logger, setup_logging
from guestlist.core.rate_limit import limiter
from guestlist.middleware import LoggingMiddleware
from guestlist.schemas import HealthResponse
from guestlist.sheets import TableStore

# Initialize structured logging
setup_logging(level=settings.LOG_LEVEL)
logger = get_logger(__name__)

if settings.ENVIRONMENT == "production":
    settings.validate_production_config()

logger.info(
    "application_starting",
    app_title=settings.APP_TITLE,
    app_version=settings.APP_VERSION,
    environment=settings.ENVIRONMENT,
    sheet=settings.SHEET_NAME,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with a single readable message."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(SchemaError)
async def schema_exception_handler(request: Request, exc: SchemaError):
    logger.error("schema_error", error=str(exc))
    return JSONResponse(status_code=500, content={"message": "Guest sheet is misconfigured."})


@app.exception_handler(BackendError)
async def backend_exception_handler(request: Request, exc: BackendError):
    # Raised outside the endpoints, e.g. while building the store dependency
    logger.error("backend_error", error=str(exc))
    return JSONResponse(status_code=503, content={"message": "Guest sheet is unavailable."})


# Must be added before other middleware for proper request tracking
app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    """Add X-API-Version header to all responses for version tracking."""
    response = await call_next(request)
    response.headers["X-API-Version"] = settings.APP_VERSION
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-API-Version"],
)

app.include_router(api_router)


@app.get("/health", response_model=HealthResponse)
def health_check(store: TableStore = Depends(get_store)):
    """
    Health check endpoint.

    Reads the guest sheet once to prove credentials and sharing are in place.

    Returns:
        - status: "healthy" or "unhealthy"
        - environment: Current environment setting
        - sheet: Configured worksheet name
        - backend: "connected" or "unreachable"
        - rows: Number of rows in the sheet, header included

    Returns 503 if the sheet cannot be read.
    """
    health_status = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "sheet": settings.SHEET_NAME,
        "backend": "connected",
    }

    try:
        health_status["rows"] = len(store.read_table())
    except BackendError as e:
        logger.error("health_check_failed", error=str(e))
        health_status["status"] = "unhealthy"
        health_status["backend"] = "unreachable"
        return JSONResponse(status_code=503, content=health_status)

    return health_status
