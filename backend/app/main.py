import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from app.api.routes import router as api_router
from app.core.config import get_settings
from app.core.errors import InputError, NotFound
from app.db.database import build_engine
from app.services.cache import TTLCache
from app.services.orchestrator import QueryOrchestrator
from app.services.seeder import seed_if_empty
from app.services.store import DistrictStore

logger = logging.getLogger("api")


def build_orchestrator(settings):
    """Wire cache, store and orchestrator. Returns (orchestrator, engine or None)."""
    store, engine = None, None
    if settings.database_url:
        engine = build_engine(settings.database_url, timeout=settings.store_timeout_seconds)
        store = DistrictStore(engine)
        # Try to create tables (safe), the fallback covers a dead database
        try:
            store.create_tables()
            if settings.auto_seed:
                seed_if_empty(store)
        except OperationalError as e:
            logger.warning("Database connection failed: %s", e)
    else:
        logger.warning("No DATABASE_URL configured, serving fallback data only")

    cache = TTLCache(ttl=settings.cache_ttl_seconds)
    orchestrator = QueryOrchestrator(cache, store, store_timeout=settings.store_timeout_seconds)
    return orchestrator, engine


def create_app(settings=None, orchestrator=None):
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app):
        engine = None
        owned = app.state.orchestrator is None
        if owned:
            app.state.orchestrator, engine = build_orchestrator(settings)
        yield
        if owned:
            app.state.orchestrator.close()
            app.state.orchestrator = None
        if engine is not None:
            engine.dispose()

    app = FastAPI(title="MGNREGA District Insights API", version="1.0", lifespan=lifespan)
    app.state.orchestrator = orchestrator

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InputError)
    async def input_error(request: Request, exc: InputError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        content = {"detail": "Something went wrong!"}
        if settings.is_development:
            content["message"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    app.include_router(api_router)

    # Root route
    @app.get("/")
    def root():
        return {"message": "MGNREGA district insights backend is running successfully!"}

    return app


app = create_app()


def run(settings=None):
    settings = settings or get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
