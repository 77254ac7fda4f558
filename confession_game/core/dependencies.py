# confession_game/core/dependencies.py
import httpx
import redis.asyncio as redis  # Use asyncio Redis client
from web3 import AsyncWeb3

from confession_game.core.config import settings


def create_redis_client() -> redis.Redis:
    """Build a Redis client; the Upstash token doubles as the password."""
    return redis.from_url(
        settings.REDIS_URL,
        password=settings.REDIS_TOKEN,
        encoding="utf-8",
        decode_responses=True,
    )


async def get_redis_client():
    """Dependency to provide a Redis client."""
    redis_client = create_redis_client()
    try:
        yield redis_client
    finally:
        await redis_client.close()


async def get_http_client():
    """Dependency to provide an HTTP client for calls back into the app's own API."""
    async with httpx.AsyncClient(base_url=settings.APP_BASE_URL, timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        yield client


_web3 = None


def get_web3() -> AsyncWeb3:
    global _web3
    if _web3 is None:
        _web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(settings.RPC_URL))
    return _web3
