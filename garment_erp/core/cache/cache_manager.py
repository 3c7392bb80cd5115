import redis
from garment_erp.core.setting import config
import logging


# Set up logger
logger = logging.getLogger(__name__)

# Module-level client, created lazily on first use
_redis_client = None


def get_redis_client():
    """
    Returns the Redis client instance.
    Initializes it only once. Connection errors surface on first command,
    so callers treat the cache as optional.
    """
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.Redis(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5
        )
        logger.info(f"Redis client configured for {config.REDIS_HOST}:{config.REDIS_PORT}")
    return _redis_client
