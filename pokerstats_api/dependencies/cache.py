import logging

from upstash_redis.asyncio import Redis

from pokerstats_api.config import Settings
from pokerstats_api.schemas.profile import ProfileResponse

logger = logging.getLogger(__name__)


class ProfileCache:
    """Read-through cache of profile responses keyed by user id.

    A cache built without a Redis client is disabled: reads always miss and
    writes are dropped. Redis failures are logged and never propagate.
    """

    def __init__(self, redis_client: Redis | None = None, ttl_seconds: int = 300):
        self._redis = redis_client
        self._ttl_seconds = ttl_seconds

    @property
    def enabled(self) -> bool:
        return self._redis is not None

    def _key(self, user_id: str) -> str:
        return f"profile:{user_id}"

    async def get(self, user_id: str) -> ProfileResponse | None:
        if self._redis is None:
            return None
        try:
            raw = await self._redis.get(self._key(user_id))
            if raw is None:
                logger.debug("Profile cache miss for user %s", user_id)
                return None
            profile = ProfileResponse.model_validate_json(raw)
        except Exception as e:
            # Unreachable or corrupt entries count as misses
            logger.warning("Profile cache read failed for user %s: %s", user_id, e)
            return None
        logger.debug("Profile cache hit for user %s", user_id)
        return profile

    async def put(self, profile: ProfileResponse) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set(
                self._key(profile.id),
                profile.model_dump_json(),
                ex=self._ttl_seconds,
            )
        except Exception as e:
            logger.warning("Profile cache write failed for user %s: %s", profile.id, e)
            return
        logger.debug("Profile cached for user %s (ttl=%ds)", profile.id, self._ttl_seconds)

    async def evict(self, user_id: str) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.delete(self._key(user_id))
        except Exception as e:
            logger.warning("Profile cache eviction failed for user %s: %s", user_id, e)
            return
        logger.debug("Profile cache evicted for user %s", user_id)

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.close()
            self._redis = None


_profile_cache: ProfileCache | None = None


def init_profile_cache(settings: Settings) -> ProfileCache:
    """Build the profile cache from settings.

    Must be called during app startup (lifespan).
    """
    global _profile_cache
    if settings.CACHE_ENABLED:
        logger.info("Initializing Upstash Redis profile cache")
        redis_client = Redis(
            url=settings.UPSTASH_REDIS_REST_URL,
            token=settings.UPSTASH_REDIS_REST_TOKEN,
        )
        _profile_cache = ProfileCache(redis_client, settings.PROFILE_CACHE_TTL_SECONDS)
        logger.debug("Redis client initialized with URL: %s", settings.UPSTASH_REDIS_REST_URL)
    else:
        logger.info("Profile cache disabled")
        _profile_cache = ProfileCache()
    return _profile_cache


async def close_profile_cache() -> None:
    """Close the profile cache's Redis connection."""
    global _profile_cache
    if _profile_cache is not None:
        logger.info("Closing profile cache")
        await _profile_cache.close()
        _profile_cache = None
        logger.debug("Profile cache closed")
