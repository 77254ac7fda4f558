# confession_game/core/security.py
from fastapi_limiter.depends import RateLimiter

from confession_game.core.config import settings

payment_rate_limiter = RateLimiter(
    times=settings.PAYMENT_RATE_LIMIT_TIMES,
    seconds=settings.PAYMENT_RATE_LIMIT_SECONDS,
)
