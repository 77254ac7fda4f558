# confession_game/api/routes/payment_routes.py
import logging
import traceback
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from redis.asyncio import Redis

from confession_game.core.dependencies import get_redis_client
from confession_game.core.security import payment_rate_limiter
from confession_game.models.payment_models import PaymentCreate
from confession_game.services.payment_services import check_payment_status, submit_payment
from confession_game.utils.helpers import now_ms

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])


async def _read_json_object(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.get("/{prompt_id}/payments")
async def get_prompt_payment(
    prompt_id: str,
    user_fid: Optional[str] = Query(default=None, alias="userFid"),
    redis_client: Redis = Depends(get_redis_client),
):
    """Check if a user has paid for a prompt."""
    if not user_fid:
        logger.error("[Payment API] Missing userFid in GET request")
        return JSONResponse(
            status_code=400,
            content={
                "error": "User FID required",
                "debugLog": {"error": "Missing userFid parameter", "timestamp": now_ms()},
            },
        )

    try:
        return await check_payment_status(redis_client, prompt_id, user_fid)
    except Exception as e:
        logger.exception(f"[Payment API] Error checking payment status: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to check payment status",
                "debugLog": {
                    "error": str(e),
                    "userFid": user_fid,
                    "promptId": prompt_id,
                    "timestamp": now_ms(),
                },
            },
        )


@router.post("/{prompt_id}/payments", dependencies=[Depends(payment_rate_limiter)])
async def record_prompt_payment(
    prompt_id: str,
    request: Request,
    redis_client: Redis = Depends(get_redis_client),
):
    """Record a new payment for a prompt."""
    body = await _read_json_object(request)
    received = {
        "walletAddress": body.get("walletAddress"),
        "userFid": body.get("userFid"),
        "txHash": body.get("txHash"),
    }
    logger.info(f"[Payment API] Incoming POST /payments for prompt {prompt_id}: {received}")

    try:
        payment = PaymentCreate.model_validate(body)
    except ValidationError as e:
        logger.error(f"[Payment API] Missing required fields in payment POST: {e.errors()}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Missing required fields",
                "debugLog": {
                    "error": "Missing required fields",
                    "received": received,
                    "timestamp": now_ms(),
                },
            },
        )

    try:
        return await submit_payment(redis_client, prompt_id, payment)
    except Exception as e:
        logger.exception(f"[Payment API] Error recording payment: {e}")
        stack = traceback.format_exc()
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to record payment",
                "stack": stack,
                "input": received,
                "debugLog": {
                    "error": str(e),
                    "stack": stack,
                    "promptId": prompt_id,
                    "timestamp": now_ms(),
                },
            },
        )
