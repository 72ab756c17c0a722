from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
import logging

from products_api.config import Settings, get_settings
from products_api.database import connect_db, dispose_db
from products_api.api import products
from products_api.utils.cors import OriginAllowListMiddleware
from products_api.utils.request_logging import RequestLoggingMiddleware
from products_api.utils.validation import RequestValidationFailed

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    app_settings: Settings = app.state.settings

    # Startup
    logger.info("Starting up application...")
    if not connect_db(required=app_settings.DB_CONNECT_REQUIRED):
        logger.warning("Serving without a database; product routes will fail with 500")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    dispose_db()


async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [error.to_dict() for error in exc.errors]}
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


def create_app(app_settings: Settings = None) -> FastAPI:
    """Build the FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Products REST API",
        description="""
    REST API for managing a product catalog.

    - **List** and **fetch** products
    - **Create**, **replace** and **delete** products
    - **Toggle** the availability of a product

    Invalid input is rejected with `400` and a list of
    `{field, message}` errors before the database is touched.
    """,
        version="1.0.0",
        docs_url=app_settings.DOCS_URL,
        openapi_url=f"{app_settings.DOCS_URL}/openapi.json",
        redoc_url=None,
        lifespan=lifespan
    )
    app.state.settings = app_settings

    # Middleware added last runs first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        OriginAllowListMiddleware,
        allowed_origins=app_settings.allowed_origins
    )

    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Include API routers
    app.include_router(products.router, prefix=app_settings.API_PREFIX)

    return app


app = create_app()


def run():
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
