import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from josaa_api.config import Settings, settings as default_settings
from josaa_api.dataset import SeatStoreProvider
from josaa_api.exceptions import LoadError
from josaa_api.services.rate_limit_service import RateLimiter, enforce_rate_limit
from josaa_api.domains.seat_search.routers import search_router, catalog_router
from josaa_api.domains.seat_search.schemas.search_schemas import HealthResponse
from ingestion.csv_ingestion.csv_loader import load_seat_store

logger = logging.getLogger("JoSAAApi")

ENDPOINTS = [
    "/health",
    "/api/stats",
    "/api/records/count",
    "/api/records",
    "/api/institutes",
    "/api/programs",
    "/api/check",
    "/api/search",
]

def create_app(settings: Settings = default_settings, store_provider: Optional[SeatStoreProvider] = None) -> FastAPI:
    logging.basicConfig(level=settings.LOG_LEVEL)

    if store_provider is None:
        csv_path = settings.CSV_PATH
        store_provider = SeatStoreProvider(lambda: load_seat_store(csv_path))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Load once, before traffic. Failure keeps the API up but data routes answer 503.
        try:
            app.state.store_provider.get()
        except LoadError as e:
            logger.critical(f"Failed to initialize data during startup: {e}")
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        lifespan=lifespan,
        dependencies=[Depends(enforce_rate_limit)],
    )
    app.state.store_provider = store_provider
    app.state.rate_limiter = None
    if settings.RATE_LIMIT:
        app.state.rate_limiter = RateLimiter(settings.RATE_LIMIT, settings.RATE_LIMIT_WINDOW_SECONDS)
        logger.info(f"Rate limit: {settings.RATE_LIMIT} requests / {settings.RATE_LIMIT_WINDOW_SECONDS}s per IP")

    # --- CORS POLICY ---
    origins = settings.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(search_router.router)
    app.include_router(catalog_router.router)

    @app.get("/")
    def root():
        return {"message": f"{settings.PROJECT_NAME} API is running", "endpoints": ENDPOINTS}

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        provider: SeatStoreProvider = app.state.store_provider
        if provider.is_loaded:
            return {
                "status": "healthy",
                "dataset": "loaded",
                "records": provider.get().count(),
                "environment": settings.PROJECT_NAME,
            }
        if provider.error is not None:
            return {
                "status": "unhealthy",
                "dataset": "failed",
                "detail": str(provider.error),
                "environment": settings.PROJECT_NAME,
            }
        return {"status": "unhealthy", "dataset": "pending", "environment": settings.PROJECT_NAME}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
