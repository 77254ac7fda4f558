# confession_game/services/confirm_services.py
import html
import logging
from typing import Optional

import httpx
from redis.asyncio import Redis
from web3 import AsyncWeb3

from confession_game.core.config import settings
from confession_game.models.confirm_models import (
    ConfirmationResult,
    ConfirmationStatus,
    ConfirmPageState,
    ConfirmPromptRequest,
    WrongNetworkError,
)
from confession_game.models.prompt_models import StoredPrompt
from confession_game.services.chain_services import (
    decode_prompt_created,
    find_prompt_created_log,
    get_transaction_receipt,
)
from confession_game.services.database.confirmation_database_services import (
    claim_confirmation,
    get_confirmation,
    update_confirmation,
)
from confession_game.services.database.prompt_database_services import create_prompt
from confession_game.services.notification_services import send_notification
from confession_game.services.user_services import resolve_fid
from confession_game.utils.helpers import now_ms

logger = logging.getLogger(__name__)

CREATE_PROMPT_PATH = "/create-prompt"
WRONG_NETWORK_MESSAGE = "Please switch to Base network"
EVENT_NOT_FOUND_MESSAGE = "PromptCreated event not found in logs."


def resolve_page_state(prompt: Optional[str], address: Optional[str], chain_id: Optional[int]) -> ConfirmPageState:
    if not prompt:
        return ConfirmPageState.REDIRECT
    if not address:
        return ConfirmPageState.CONNECT_WALLET
    if chain_id != settings.CHAIN_ID:
        return ConfirmPageState.WRONG_NETWORK
    return ConfirmPageState.READY


def render_confirm_page(prompt: str, state: ConfirmPageState) -> str:
    if state == ConfirmPageState.CONNECT_WALLET:
        action = '<button id="connect-wallet">Connect Wallet</button>'
    elif state == ConfirmPageState.WRONG_NETWORK:
        action = f'<div class="network-warning">{WRONG_NETWORK_MESSAGE}</div>'
    else:
        action = '<button id="submit-prompt">Confirm &amp; Post</button>'

    return f"""<!DOCTYPE html>
<html>
  <head>
    <title>Confirm your prompt</title>
  </head>
  <body data-state="{state.value}">
    <h2>YOUR PROMPT</h2>
    <div>NEVER HAVE<br />I EVER...</div>
    <div class="prompt">{html.escape(prompt)}</div>
    <p class="warning">No take-backs or changes after confirmation. Choose wisely before unleashing chaos.</p>
    {action}
  </body>
</html>
"""


async def confirm_prompt(
    request: ConfirmPromptRequest, redis_client: Redis, http_client: httpx.AsyncClient, w3: AsyncWeb3
) -> ConfirmationResult:
    """
    Runs the post-confirmation sequence for a transaction hash exactly once.
    Later calls for the same hash get the recorded outcome back.
    """
    if request.chainId is not None and request.chainId != settings.CHAIN_ID:
        raise WrongNetworkError(WRONG_NETWORK_MESSAGE)

    if not await claim_confirmation(redis_client, request.txHash):
        existing = await get_confirmation(redis_client, request.txHash)
        if existing is None:
            # The claim expired between the two calls; report it as in flight.
            existing = ConfirmationResult(txHash=request.txHash, status=ConfirmationStatus.HANDLING)
        logger.info(f"Transaction {request.txHash} already handled with status {existing.status.value}")
        existing.alreadyHandled = True
        return existing

    return await _handle_confirmed_transaction(request, redis_client, http_client, w3)


async def _handle_confirmed_transaction(
    request: ConfirmPromptRequest, redis_client: Redis, http_client: httpx.AsyncClient, w3: AsyncWeb3
) -> ConfirmationResult:
    tx_hash = request.txHash
    try:
        receipt = await get_transaction_receipt(w3, tx_hash)

        log = find_prompt_created_log(receipt, settings.CONTRACT_ADDRESS)
        if log is None:
            logger.warning(f"{EVENT_NOT_FOUND_MESSAGE} txHash={tx_hash}")
            await update_confirmation(
                redis_client, tx_hash, ConfirmationStatus.EVENT_NOT_FOUND, debug_message=EVENT_NOT_FOUND_MESSAGE
            )
            return ConfirmationResult(
                txHash=tx_hash, status=ConfirmationStatus.EVENT_NOT_FOUND, debugMessage=EVENT_NOT_FOUND_MESSAGE
            )

        logger.debug(f"Found PromptCreated log in {tx_hash}, decoding")
        event = decode_prompt_created(log)
        logger.info(f"Prompt ID decoded: {event.prompt_id}")

        # Content and author come from the event, never from the request body.
        if request.prompt != event.content or request.walletAddress.lower() != event.author.lower():
            logger.warning(
                f"Request body for {tx_hash} does not match the PromptCreated event; "
                f"storing the on-chain content and author {event.author}"
            )

        fid = await resolve_fid(http_client, event.author)

        created_at = now_ms()
        await create_prompt(
            redis_client,
            StoredPrompt(
                id=event.prompt_id,
                content=event.content,
                authorFid=fid,
                createdAt=created_at,
                expiresAt=created_at + settings.PROMPT_TTL_SECONDS * 1000,
            ),
        )

        redirect_url = f"/prompts/{event.prompt_id}"
        await send_notification(
            http_client,
            "Prompt Submitted!",
            'Your "Never Have I Ever" prompt has been posted.',
            target_url=f"{settings.APP_BASE_URL}{redirect_url}",
        )

        debug_message = "Prompt saved. Redirecting..."
        await update_confirmation(
            redis_client,
            tx_hash,
            ConfirmationStatus.COMPLETED,
            prompt_id=event.prompt_id,
            redirect_url=redirect_url,
            debug_message=debug_message,
        )
        return ConfirmationResult(
            txHash=tx_hash,
            status=ConfirmationStatus.COMPLETED,
            promptId=event.prompt_id,
            redirectUrl=redirect_url,
            debugMessage=debug_message,
        )

    except Exception as e:
        logger.exception(f"Error handling confirmed transaction {tx_hash}: {e}")
        debug_message = f"Error: {e}"
        await update_confirmation(redis_client, tx_hash, ConfirmationStatus.FAILED, debug_message=debug_message)
        await send_notification(http_client, "Error", "Failed to store prompt. Please try again.")
        return ConfirmationResult(txHash=tx_hash, status=ConfirmationStatus.FAILED, debugMessage=debug_message)
