# Standard library
import time
from contextlib import asynccontextmanager
import uuid

# Third party
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from yaml import dump

# Local imports
from storefront.core.config import settings
from storefront.core.exceptions import ServerError, StorefrontError
from storefront.core.logging import get_logger
import storefront.api as api


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events"""
    logger.info("Storefront API starting up...")

    # Test database connection
    try:
        from storefront.db.base import get_db_session

        session_gen = get_db_session()
        session = next(session_gen)
        session.execute(text("SELECT 1")).fetchone()
        session.close()
        logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise

    yield

    logger.info("Storefront API shutting down...")


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as {"message": ...}"""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        if isinstance(exc, ServerError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return _message(exc.status_code, exc.public_message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return _message(exc.status_code, f"Route not found: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(part) for part in error["loc"][1:]), "message": error["msg"]}
            for error in exc.errors()
        ]
        return _message(status.HTTP_400_BAD_REQUEST, "Invalid request", errors=errors)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Storefront API",
        description="Product catalog for an online store: products with media, categories, offers and reviews.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        default_response_class=JSONResponse,
    )

    register_exception_handlers(app)

    # Mount store APIs
    for name, router in api.store_routers:
        app.include_router(router, prefix="/api", tags=[name])

    app.include_router(api.health_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())
        start_time = time.time()
        logger.info(f"[{request_id}] {request.method} {request.url}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"[{request_id}] Request failed after {process_time:.4f}s: {str(e)}",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(f"[{request_id}] {response.status_code} in {process_time:.4f}s")
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.get("/", tags=["health"])
    async def root():
        """Service banner"""
        return {"message": "Storefront API is running", "docs": "/docs"}

    @app.get("/openapi.yaml", include_in_schema=False)
    async def get_openapi_yaml():
        """Serve full OpenAPI specification in YAML format"""
        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        yaml_content = dump(openapi_schema, default_flow_style=False, sort_keys=False)
        return Response(content=yaml_content, media_type="application/x-yaml")

    return app


app = create_app()
