# confession_game/services/database/confirmation_database_services.py
from typing import Optional

from redis.asyncio import Redis

from confession_game.core.config import settings
from confession_game.models.confirm_models import ConfirmationResult, ConfirmationStatus


def confirmation_key(tx_hash: str) -> str:
    return f"confirmation:{tx_hash.lower()}"


async def claim_confirmation(redis_client: Redis, tx_hash: str) -> bool:
    """
    Moves an unseen hash into HANDLING. False if the hash was already claimed.

    The claim expires after CONFIRMATION_HANDLING_TIMEOUT_SECONDS, so a hash
    whose handler died mid-sequence can be claimed again.
    """
    key = confirmation_key(tx_hash)
    claimed = await redis_client.hsetnx(key, "status", ConfirmationStatus.HANDLING.value)
    if not claimed:
        return False
    await redis_client.expire(key, settings.CONFIRMATION_HANDLING_TIMEOUT_SECONDS)
    return True


async def update_confirmation(
    redis_client: Redis,
    tx_hash: str,
    status: ConfirmationStatus,
    prompt_id: Optional[str] = None,
    redirect_url: Optional[str] = None,
    debug_message: Optional[str] = None,
) -> None:
    key = confirmation_key(tx_hash)
    mapping = {"status": status.value}
    if prompt_id is not None:
        mapping["promptId"] = prompt_id
    if redirect_url is not None:
        mapping["redirectUrl"] = redirect_url
    if debug_message is not None:
        mapping["debugMessage"] = debug_message
    await redis_client.hset(key, mapping=mapping)
    if status != ConfirmationStatus.HANDLING:
        await redis_client.expire(key, settings.CONFIRMATION_TTL_SECONDS)


async def get_confirmation(redis_client: Redis, tx_hash: str) -> Optional[ConfirmationResult]:
    data = await redis_client.hgetall(confirmation_key(tx_hash))
    if not data:
        return None
    return ConfirmationResult(
        txHash=tx_hash,
        status=ConfirmationStatus(data["status"]),
        promptId=data.get("promptId"),
        redirectUrl=data.get("redirectUrl"),
        debugMessage=data.get("debugMessage"),
    )
