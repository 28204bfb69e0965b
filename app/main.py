import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import router as v1_router
from app.config import settings
from app.core.resilience import with_timeout
from app.database import async_session_maker, check_db_connection, engine, init_db
from app.core.exceptions import AppException, OperationTimeoutError
from app.core.exception_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)
from app.services.interaction_service import InteractionResolver, LikeEdgeStore
from app.services.match_store import MatchStore
from app.services.storage_service import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_storage(database_available: bool) -> KeyValueStore:
    if database_available:
        return SqlKeyValueStore(async_session_maker)
    logger.warning("Database connection failed - matches are kept in memory only")
    return MemoryKeyValueStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    database_available = await check_db_connection()
    if database_available:
        logger.info("Database connection successful")
        # Alembic manages the schema in deployed setups; this covers fresh SQLite files
        await init_db()

    store = MatchStore(create_storage(database_available))
    await store.load()
    logger.info(f"Loaded {len(store.matches)} active matches")

    app.state.match_store = store
    app.state.interaction_resolver = InteractionResolver(LikeEdgeStore())
    yield

    try:
        await with_timeout(store.flush, timeout=5.0)
    except OperationTimeoutError as e:
        logger.error(f"Pending matches were not saved on shutdown: {e.message}")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Parse CORS origins from settings
cors_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
