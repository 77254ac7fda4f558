# confession_game/services/database/payment_database_services.py
from redis.asyncio import Redis

from confession_game.utils.helpers import now_ms


def payments_key(prompt_id: str) -> str:
    return f"prompt:{prompt_id}:payments"


def payment_detail_key(prompt_id: str, user_fid: str) -> str:
    return f"prompt:{prompt_id}:payment:{user_fid}"


async def has_user_paid(redis_client: Redis, prompt_id: str, user_fid: str) -> bool:
    return bool(await redis_client.sismember(payments_key(prompt_id), user_fid))


async def count_payments(redis_client: Redis, prompt_id: str) -> int:
    return int(await redis_client.scard(payments_key(prompt_id)))


async def record_payment(
    redis_client: Redis, prompt_id: str, user_fid: str, user_address: str, tx_hash: str
) -> bool:
    """
    Adds the user to the prompt's paid-set and stores the payment details.

    SADD is the conditional write: it reports whether the fid was newly added,
    so a second payment for the same user never reaches the detail hash.
    If the detail write fails the fid is taken back out of the paid-set so the
    client can retry.
    Returns True when the payment was recorded, False when it already existed.
    """
    added = await redis_client.sadd(payments_key(prompt_id), user_fid)
    if not added:
        return False

    try:
        await redis_client.hset(
            payment_detail_key(prompt_id, user_fid),
            mapping={
                "userAddress": user_address.lower(),
                "txHash": tx_hash,
                "timestamp": now_ms(),
            },
        )
    except Exception:
        await redis_client.srem(payments_key(prompt_id), user_fid)
        raise
    return True
