# freshconnect/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from freshconnect.api.routers import carts, favorites, health, orders, producer, products, users
from freshconnect.celery_worker import configure_celery
from freshconnect.data.database import Database
from freshconnect.data.seed import seed_lookups
from freshconnect.domain.errors import AppError
from freshconnect.utils.logging import configure_logging, get_logger
from freshconnect.utils.settings import Settings

logger = get_logger(__name__)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(exc.message, method=request.method, path=request.url.path)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request", details=jsonable_encoder(exc.errors()))

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("DB error", method=request.method, path=request.url.path, exc_info=exc)
        return _error(500, "DB error")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", method=request.method, path=request.url.path, exc_info=exc)
        return _error(500, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, json_logs=settings.log_json)
    configure_celery(settings)

    database = Database(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        if settings.seed_lookups:
            with database.session() as db:
                seed_lookups(db)
        logger.info("Trichy Fresh Connect API started")
        yield
        database.dispose()

    app = FastAPI(
        title="Trichy Fresh Connect",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(favorites.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(producer.router)

    return app
