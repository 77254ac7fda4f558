# confession_game/api/routes/confirm_routes.py
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import ValidationError
from redis.asyncio import Redis
from web3 import AsyncWeb3

from confession_game.core.dependencies import get_http_client, get_redis_client, get_web3
from confession_game.models.confirm_models import ConfirmPageState, ConfirmPromptRequest, WrongNetworkError
from confession_game.services.confirm_services import (
    CREATE_PROMPT_PATH,
    confirm_prompt,
    render_confirm_page,
    resolve_page_state,
)
from confession_game.services.database.confirmation_database_services import get_confirmation
from confession_game.utils.helpers import now_ms

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Confirm Prompt"])


@router.get("/confirm-prompt")
async def confirm_prompt_page(
    prompt: Optional[str] = None,
    address: Optional[str] = None,
    chain_id: Optional[int] = Query(default=None, alias="chainId"),
):
    state = resolve_page_state(prompt, address, chain_id)
    if state == ConfirmPageState.REDIRECT:
        return RedirectResponse(CREATE_PROMPT_PATH)
    return HTMLResponse(render_confirm_page(prompt, state))


@router.post("/api/confirm-prompt")
async def confirm_prompt_transaction(
    request: Request,
    redis_client: Redis = Depends(get_redis_client),
    http_client: httpx.AsyncClient = Depends(get_http_client),
    w3: AsyncWeb3 = Depends(get_web3),
):
    """
    Store the prompt created by a confirmed transaction. Each transaction hash
    is handled once; repeats return the recorded outcome.
    """
    try:
        body = await request.json()
        payload = ConfirmPromptRequest.model_validate(body)
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid confirm-prompt request: {e}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Missing required fields",
                "debugLog": {"error": str(e), "timestamp": now_ms()},
            },
        )

    try:
        result = await confirm_prompt(payload, redis_client, http_client, w3)
    except WrongNetworkError as e:
        return JSONResponse(
            status_code=400,
            content={"error": str(e), "debugLog": {"chainId": payload.chainId, "timestamp": now_ms()}},
        )
    except Exception as e:
        logger.exception(f"Error confirming prompt transaction {payload.txHash}: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to confirm prompt",
                "debugLog": {"error": str(e), "txHash": payload.txHash, "timestamp": now_ms()},
            },
        )

    return result.model_dump(mode="json")


@router.get("/api/confirm-prompt/{tx_hash}")
async def get_confirmation_status(tx_hash: str, redis_client: Redis = Depends(get_redis_client)):
    result = await get_confirmation(redis_client, tx_hash)
    if result is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return result.model_dump(mode="json")
