import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokerstats_api.config import get_settings
from pokerstats_api.dependencies.cache import close_profile_cache, init_profile_cache
from pokerstats_api.errors import register_exception_handlers
from pokerstats_api.routers import users
from pokerstats_api.services.profile import init_profile_service

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Poker Stats API")
    logger.debug("Debug mode: %s", settings.DEBUG)

    # Collaborators are built here from settings, nothing activates implicitly
    cache = init_profile_cache(settings)
    init_profile_service(cache=cache, auditing_enabled=settings.AUDITING_ENABLED)
    logger.info(
        "Profile service ready (cache=%s, auditing=%s)",
        cache.enabled,
        settings.AUDITING_ENABLED,
    )

    yield

    logger.info("Shutting down Poker Stats API")
    await close_profile_cache()
    logger.info("Profile cache cleanup complete")


app = FastAPI(
    title="Poker Stats API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.debug("CORS configured with origins: %s", settings.CORS_ORIGINS)

register_exception_handlers(app)

app.include_router(users.router, prefix="/api/v1")
logger.debug("Routers registered: /api/v1/users")


@app.get("/")
def root():
    return {"message": "Poker Stats API"}


@app.get("/health")
def health():
    return {"status": "healthy"}
