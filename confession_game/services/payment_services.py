# confession_game/services/payment_services.py
import logging

from redis.asyncio import Redis

from confession_game.models.payment_models import PaymentCreate
from confession_game.services.database.payment_database_services import (
    count_payments,
    has_user_paid,
    record_payment,
)
from confession_game.utils.helpers import now_ms

logger = logging.getLogger(__name__)


async def check_payment_status(redis_client: Redis, prompt_id: str, user_fid: str) -> dict:
    """Reports whether a user is in the prompt's paid-set and how many users have paid."""
    logger.info(f"[Payment API] Checking payment status: promptId={prompt_id} userFid={user_fid}")

    has_paid = await has_user_paid(redis_client, prompt_id, user_fid)
    total_paid = await count_payments(redis_client, prompt_id)

    logger.info(f"[Payment API] Payment status check result: hasPaid={has_paid} totalPaid={total_paid}")
    return {
        "hasPaid": has_paid,
        "totalPaid": total_paid,
        "debugLog": {
            "userFid": user_fid,
            "promptId": prompt_id,
            "hasPaid": has_paid,
            "totalPaid": total_paid,
            "timestamp": now_ms(),
        },
    }


async def submit_payment(redis_client: Redis, prompt_id: str, payment: PaymentCreate) -> dict:
    """
    Records a payment for a prompt. Recording the same user twice is a no-op
    that reports the existing payment.
    """
    normalized_address = payment.walletAddress.lower()
    logger.info(
        f"[Payment API] Recording payment: promptId={prompt_id} userFid={payment.userFid} "
        f"address={normalized_address} txHash={payment.txHash}"
    )

    recorded = await record_payment(redis_client, prompt_id, payment.userFid, normalized_address, payment.txHash)
    total_paid = await count_payments(redis_client, prompt_id)

    if not recorded:
        logger.info(f"[Payment API] Payment already recorded: promptId={prompt_id} userFid={payment.userFid}")
        return {
            "message": "Payment already recorded",
            "hasPaid": True,
            "totalPaid": total_paid,
            "debugLog": {
                "userFid": payment.userFid,
                "promptId": prompt_id,
                "status": "already_paid",
                "totalPaid": total_paid,
                "timestamp": now_ms(),
            },
        }

    logger.info(f"[Payment API] Payment recorded successfully: promptId={prompt_id} totalPaid={total_paid}")
    return {
        "message": "Payment recorded successfully",
        "hasPaid": True,
        "totalPaid": total_paid,
        "debugLog": {
            "userFid": payment.userFid,
            "promptId": prompt_id,
            "walletAddress": normalized_address,
            "txHash": payment.txHash,
            "totalPaid": total_paid,
            "timestamp": now_ms(),
        },
    }
