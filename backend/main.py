import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from core.config import get_settings
from core.database import engine, Base
from core.exceptions import StoreError
from api.v1 import rankings, health
from integrations.tranco import close_tranco_client

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    Base.metadata.create_all(bind=engine)
    logger.info(
        f"Application started (Tranco: {settings.tranco_api_base}, cache {settings.cache_hours}h)"
    )

    yield

    # Shutdown
    await close_tranco_client()
    logger.info("Application shutdown")


app = FastAPI(
    title="Domain Ranking API",
    description="Tranco 도메인 랭킹 이력 read-through 캐시",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(rankings.router, prefix="/api/v1/rankings", tags=["rankings"])
# 기존 클라이언트 호환 경로
app.include_router(rankings.router, prefix="/rankings", tags=["rankings"], include_in_schema=False)
app.include_router(health.router, prefix="/api/v1/health", tags=["health"])


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content={"detail": "Ranking store unavailable"})


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
