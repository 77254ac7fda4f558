# confession_game/services/database/prompt_database_services.py
from typing import Optional

from redis.asyncio import Redis

from confession_game.models.prompt_models import StoredPrompt

ACTIVE_PROMPTS_KEY = "prompts:active"


def prompt_key(prompt_id: str) -> str:
    return f"prompt:{prompt_id}"


async def create_prompt(redis_client: Redis, prompt: StoredPrompt) -> StoredPrompt:
    await redis_client.hset(prompt_key(prompt.id), mapping=prompt.model_dump())
    await redis_client.zadd(ACTIVE_PROMPTS_KEY, {prompt.id: prompt.expiresAt})
    return prompt


async def get_prompt(redis_client: Redis, prompt_id: str) -> Optional[StoredPrompt]:
    data = await redis_client.hgetall(prompt_key(prompt_id))
    if not data:
        return None
    return StoredPrompt(**data)
