# app/main.py
import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import admin, auth, leads
from app.core.config import Settings, get_settings
from app.core.database import InMemoryDatabase
from app.core.exceptions import AppError, UnexpectedError
from app.core.logger import configure_logging
from app.services.auth_service import AuthStore
from app.services.enrichment import EnrichmentService, build_enrichment_provider
from app.services.lead_service import LeadService
from app.services.market_data import StaticMarketDataProvider
from app.services.scoring import LeadScorer

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    missing = [
        ".".join(str(part) for part in error["loc"] if part != "body")
        for error in exc.errors()
        if error.get("type") == "missing"
    ]
    message = f"Missing required fields: {', '.join(missing)}" if missing else "Invalid request"
    details = [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]
    return JSONResponse(status_code=400, content={"error": message, "details": details})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, UnexpectedError())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.SEED_DEMO_USERS:
            await app.state.auth_store.seed_demo_users()
        if settings.SEED_DEMO_LEADS:
            await app.state.db.seed_demo_leads()
        logger.info("%s %s started (%s)", settings.PROJECT_NAME, settings.VERSION, settings.ENVIRONMENT)
        yield

    app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

    db = InMemoryDatabase()
    app.state.settings = settings
    app.state.db = db
    app.state.auth_store = AuthStore(
        session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    app.state.lead_service = LeadService(db, LeadScorer(seed=settings.SCORING_SEED))
    app.state.enrichment_service = EnrichmentService(
        build_enrichment_provider(settings.ENRICHMENT_PROVIDER, settings.TIMEOUT_SECONDS),
        db,
        max_age=timedelta(hours=settings.ENRICHMENT_CACHE_TTL_HOURS),
    )
    app.state.market_data = StaticMarketDataProvider()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(admin.router, prefix=settings.API_PREFIX)
    app.include_router(leads.router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": settings.VERSION}

    return app


app = create_app()
