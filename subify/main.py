"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi import Request, status
import logging

from subify.core.config import settings, get_cors_origins
from subify.core.errors import StorageError
from subify.core.logging_config import setup_logging
from subify.db.mongodb import connect_to_mongodb, close_mongodb_connection
from subify.db.seed import seed_reference_data
from subify.api.routers import expiry, notifications, plans, resellers, submissions

# Setup logging
setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    if connect_to_mongodb() and settings.SEED_ON_STARTUP:
        try:
            seed_reference_data()
        except StorageError as e:
            logger.error(f"Reference data seeding failed: {e.detail}")

    yield

    # Shutdown
    close_mongodb_connection()


# Create the FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    description="API for reseller subscription submissions and expiry tracking",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Add exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors and log them for debugging"""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {
                    "field": ".".join(str(part) for part in error.get("loc", [])[1:]) or "body",
                    "message": error.get("msg", "Invalid value"),
                }
                for error in exc.errors()
            ]
        },
    )


# Include routers
app.include_router(submissions.router)
app.include_router(expiry.router)
app.include_router(notifications.router)
app.include_router(plans.router)
app.include_router(resellers.router)


# Health check endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """Health check endpoint"""
    from subify.db.mongodb import is_connected, get_database

    health_info = {
        "status": "healthy",
        "mongodb": "connected" if is_connected() else "disconnected",
    }

    if health_info["mongodb"] == "connected":
        try:
            db = get_database()
            if db is not None:
                health_info["database"] = db.name
                health_info["collections"] = db.list_collection_names()
        except Exception as e:
            health_info["database_error"] = str(e)

    return health_info
