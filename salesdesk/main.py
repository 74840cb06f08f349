import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from salesdesk.accounts.router import router as accounts_router
from salesdesk.config import settings
from salesdesk.db import build_engine, build_sessionmaker
from salesdesk.exceptions import (
    AuthenticationError,
    AuthorizationError,
    Conflict,
    DependencyError,
    NotFound,
    SalesDeskError,
    ValidationError,
)
from salesdesk.pacing.router import router as pacing_router
from salesdesk.records.router import router as records_router
from salesdesk.schema import create_tables, ensure_bootstrap_manager

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine(settings.database_url)
    app.state.sessionmaker = build_sessionmaker(engine)
    await create_tables(engine)
    await ensure_bootstrap_manager(engine)
    logger.info("SalesDesk started (tz=%s)", settings.default_tz)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("SalesDesk stopped")


app = FastAPI(title="SalesDesk", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(accounts_router)
app.include_router(records_router)
app.include_router(pacing_router)

STATUS_BY_ERROR: dict[type[SalesDeskError], int] = {
    NotFound: 404,
    ValidationError: 422,
    AuthenticationError: 401,
    AuthorizationError: 403,
    Conflict: 409,
    DependencyError: 503,
}


def status_for(exc: SalesDeskError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


@app.exception_handler(SalesDeskError)
async def salesdesk_error_handler(request: Request, exc: SalesDeskError) -> JSONResponse:
    code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if code == 401 else None
    return JSONResponse(status_code=code, content={"detail": str(exc)}, headers=headers)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "api": {
            "login": "/api/login",
            "sellers": "/api/sellers",
            "sales": "/api/sales",
            "consignments": "/api/consignments",
            "attendances": "/api/attendances/{date}",
            "goals": "/api/goals/{date}",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
