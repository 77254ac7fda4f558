# confession_game/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379"
    REDIS_TOKEN: Optional[str] = None

    CONTRACT_ADDRESS: str
    RPC_URL: str = "https://mainnet.base.org"
    CHAIN_ID: int = 8453

    APP_BASE_URL: str = "https://debbiedoes.fun"
    NOTIFICATION_URL: Optional[str] = None

    PROMPT_TTL_SECONDS: int = 86400
    CONFIRMATION_HANDLING_TIMEOUT_SECONDS: int = 300
    CONFIRMATION_TTL_SECONDS: int = 2592000
    HTTP_TIMEOUT_SECONDS: float = 20.0

    PAYMENT_RATE_LIMIT_TIMES: int = 5
    PAYMENT_RATE_LIMIT_SECONDS: int = 10

    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "https://debbiedoes.fun",
    ]
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()
