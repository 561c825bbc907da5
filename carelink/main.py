"""
FastAPI application entry point - CareLink API
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime

from carelink.core.config import get_settings
from carelink.core.database import create_tables, test_connection, get_db_info
from carelink.core.exceptions import CareLinkError, UnexpectedError, ValidationError
from carelink.validation.common import error_messages
from carelink.api import api_router
import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    logger.info("🚀 Starting CareLink API...")
    logger.info(f"🌍 Environment: {settings.ENVIRONMENT}")
    logger.info(f"🔑 Debug: {settings.DEBUG}")

    if test_connection():
        logger.info("✅ Database connection OK")

        db_info = get_db_info()
        if db_info:
            logger.info(f"📊 {db_info['dialect']} {db_info['server_version']} - DB: {db_info['database_name']}")

        try:
            create_tables()
            logger.info("✅ Database schema verified")
        except Exception as e:
            logger.error(f"❌ Error verifying schema: {e}")
    else:
        logger.error("❌ Database connection failed")
        logger.warning("⚠️ The API will keep running without a database")

    logger.info("🎯 CareLink API ready")
    yield

    logger.info("🛑 Shutting down CareLink API...")


def create_application() -> FastAPI:
    """Build the FastAPI application"""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
## CareLink API

REST API for eldercare and community support.

### Features:
- 💊 Medications and dose tracking
- ❤️ Health metrics, dashboard and trend analytics
- 🚨 Compliance alerts to emergency contacts
- 👥 Community groups, announcements and comments
- ⭐ Facility reviews
        """,
        version=settings.VERSION,
        license_info={"name": "MIT License"},
        lifespan=lifespan,
    )

    setup_middlewares(app)
    setup_exception_handlers(app)
    setup_routes(app)

    return app


def setup_middlewares(app: FastAPI):
    """Configure middlewares"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"🌐 Allowed origins: {settings.CORS_ORIGINS}")


def setup_exception_handlers(app: FastAPI):
    """Render every error in the {"status": "error", ...} envelope"""

    @app.exception_handler(CareLinkError)
    async def carelink_error_handler(request: Request, exc: CareLinkError):
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(errors=error_messages(exc.errors()))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=UnexpectedError("Internal server error").to_dict(),
        )


def setup_routes(app: FastAPI):
    """Register routes"""

    @app.get("/")
    async def root():
        return {
            "message": "🏥 CareLink API",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "documentation": "/docs",
            "health": "/health",
            "api": "/api"
        }

    @app.get("/health")
    async def health_check():
        """Service health including database connectivity"""
        db_status = "connected" if test_connection() else "disconnected"

        health_status = {
            "status": "healthy" if db_status == "connected" else "degraded",
            "service": "CareLink API",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "database": {"status": db_status},
            "timestamp": datetime.utcnow().isoformat() + "Z"
        }

        if settings.DEBUG:
            db_info = get_db_info()
            if db_info:
                health_status["database"].update(db_info)

        return health_status

    app.include_router(api_router, prefix="/api")

    logger.info("🛣️ Routes registered")


app = create_application()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"🌐 URL: http://{settings.HOST}:{settings.PORT}")
    logger.info(f"📚 Docs: http://{settings.HOST}:{settings.PORT}/docs")

    uvicorn.run(
        "carelink.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
