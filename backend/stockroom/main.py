# backend/stockroom/main.py

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockroom.api import dashboard, reports, skus, transactions
from stockroom.core.config import Settings
from stockroom.core.database import Database
from stockroom.core.errors import InventoryError
from stockroom.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level.upper())


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


def format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # drop the "body"/"query"/"path" prefix
    loc = [str(p) for p in first.get("loc", ())[1:]]
    msg = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(400, format_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return error_response(404, "Endpoint not found", path=request.url.path)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    database = Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            database.create_all()
            logger.info("Database tables ensured")
        logger.info("Stockroom API started (%s)", settings.APP_ENV)

        yield

        database.dispose()

    app = FastAPI(title="Stockroom API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(skus.router, prefix="/api/skus", tags=["skus"])
    app.include_router(transactions.router, prefix="/api/transactions", tags=["transactions"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(reports.router, prefix="/api/reports", tags=["reports"])

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        db_ok = database.ping()
        return HealthResponse(
            status="ok" if db_ok else "degraded",
            message="Inventory API is running",
            db_connected=db_ok,
            timestamp=datetime.now(timezone.utc),
        )

    @app.get("/")
    def index():
        return {
            "name": "Stockroom API",
            "version": API_VERSION,
            "endpoints": {
                "health": "GET /api/health",
                "skus": "GET/POST /api/skus",
                "transactions": "GET/POST /api/transactions",
                "dashboard": "GET /api/dashboard/stats",
                "reports": {
                    "deadStock": "GET /api/reports/dead-stock",
                    "reorder": "GET /api/reports/reorder",
                    "reorderCsv": "GET /api/reports/reorder.csv",
                    "topSelling": "GET /api/reports/top-selling",
                    "slowMoving": "GET /api/reports/slow-moving",
                },
            },
        }

    return app


app = create_app()
