# confession_game/core/startup.py
import logging

from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis

from confession_game.core.dependencies import create_redis_client

logger = logging.getLogger(__name__)

redis_client_instance: Redis = None


async def startup_event(app: FastAPI):
    """
    Initialize resources on application startup.
    """
    global redis_client_instance

    try:
        redis_client_instance = create_redis_client()
        await redis_client_instance.ping()
        logger.info("Redis connection established.")

        await FastAPILimiter.init(redis_client_instance, prefix="limit:")
        logger.info("FastAPILimiter initialized successfully.")

    except Exception as e:
        logger.error(f"Failed to startup: {e}")
        raise


async def shutdown_event(app: FastAPI):
    global redis_client_instance

    if redis_client_instance is not None:
        await redis_client_instance.close()
        redis_client_instance = None
        logger.info("Redis connection closed.")
