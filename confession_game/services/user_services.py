# confession_game/services/user_services.py
import logging

import httpx

from confession_game.models.confirm_models import UserLookupError

logger = logging.getLogger(__name__)


async def resolve_fid(http_client: httpx.AsyncClient, wallet_address: str) -> int:
    """Looks up the social-network fid that owns a wallet address."""
    try:
        response = await http_client.get(f"/api/users/wallet/{wallet_address}")
        response.raise_for_status()
        fid = response.json().get("fid")
    except (httpx.HTTPError, ValueError) as e:
        raise UserLookupError(f"Failed to look up user for wallet {wallet_address}: {e}") from e

    if fid is None:
        raise UserLookupError(f"No user found for wallet {wallet_address}")

    logger.debug(f"Resolved wallet {wallet_address} to fid {fid}")
    return int(fid)
