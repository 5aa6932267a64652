import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack import config
from fintrack.db import Database
from fintrack.errors import FinanceError
from fintrack.routers.category_router import category_router
from fintrack.routers.movement_router import movement_router
from fintrack.routers.report_router import report_router
from fintrack.routers.user_router import user_router
from fintrack.services.category_store import CategoryStore
from fintrack.services.transaction_ledger import TransactionLedger
from fintrack.utils.date_helpers import utcnow
from fintrack.utils.logging_utils import setup_logging

logger = logging.getLogger("fintrack.api")


def create_app(database: Database = None) -> FastAPI:
    """Build the API around one persistence handle.

    The handle is created here when not supplied, its tables are created on
    startup and its engine is disposed on shutdown.
    """
    setup_logging()
    database = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init_db()
        logger.info(f"Database ready ({database.engine.dialect.name})")
        try:
            yield
        finally:
            database.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title="fintrack", lifespan=lifespan)

    ledger = TransactionLedger(database)
    app.state.database = database
    app.state.ledger = ledger
    app.state.category_store = CategoryStore(database, ledger)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FinanceError)
    async def finance_error_handler(request: Request, exc: FinanceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} | {exc.context}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.get("/api/health")
    def health():
        return {
            "message": "Server running",
            "database": database.engine.dialect.name,
            "timestamp": utcnow().isoformat(),
        }

    app.include_router(user_router)
    app.include_router(category_router)
    app.include_router(movement_router)
    app.include_router(report_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fintrack.main:app", host="0.0.0.0", port=5001)
