from garment_erp.core.cache.cache_manager import get_redis_client
from typing import List, Optional
import logging
import json
import redis

logger = logging.getLogger(__name__)

PRODUCTION_LIST_CACHE_KEY = "production_list:all"

# Master data: fixed TTL (24 Hours)
PRODUCTION_LIST_TTL_SECONDS = 86400


# -------------------------------------------------------------------
# PRODUCTION LIST CACHE
# -------------------------------------------------------------------

def get_cached_production_list() -> Optional[List[dict]]:
    """Cached production list, or None on a miss or when Redis is down."""
    try:
        cached = get_redis_client().get(PRODUCTION_LIST_CACHE_KEY)
    except redis.RedisError as e:
        logger.warning(f"Production list cache read failed: {e}")
        return None
    return json.loads(cached) if cached else None


def store_production_list(items: List[dict]) -> None:
    try:
        get_redis_client().setex(PRODUCTION_LIST_CACHE_KEY, PRODUCTION_LIST_TTL_SECONDS, json.dumps(items))
    except redis.RedisError as e:
        logger.warning(f"Production list cache write failed: {e}")


async def refresh_production_list_cache():
    """
    INVALIDATES -> FETCHES -> SAVES Production List Cache.

    Usage:
        Call this after POST / PUT / DELETE operations on production items.

    Logic:
        1. Deletes old key.
        2. Fetches all production items from MongoDB (Beanie).
        3. Saves to Redis with a fixed 24h TTL.
    """
    # Import model locally
    from garment_erp.core.models.production_list import ProductionItem

    try:
        get_redis_client().delete(PRODUCTION_LIST_CACHE_KEY)
    except redis.RedisError as e:
        logger.warning(f"Production list cache invalidation failed: {e}")
        return

    items = await ProductionItem.find_all().sort("-created_at").to_list()
    formatted = [item.model_dump(mode="json") for item in items]
    store_production_list(formatted)

    logger.info(f"Production List Cache Refreshed: {PRODUCTION_LIST_CACHE_KEY} | TTL: 24H | Records: {len(formatted)}")
