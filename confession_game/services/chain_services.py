# confession_game/services/chain_services.py
import logging
from typing import Any, Mapping, Optional

from eth_abi import decode as abi_decode
from web3 import AsyncWeb3, Web3

from confession_game.models.confirm_models import PromptCreatedEvent

logger = logging.getLogger(__name__)

# event PromptCreated(uint256 indexed promptId, address indexed author, string content, uint256 expiresAt)
PROMPT_CREATED_SIGNATURE = "PromptCreated(uint256,address,string,uint256)"
PROMPT_CREATED_TOPIC = Web3.to_hex(Web3.keccak(text=PROMPT_CREATED_SIGNATURE))
PROMPT_CREATED_DATA_TYPES = ["string", "uint256"]


def _as_hex(value: Any) -> str:
    """Topics arrive as HexBytes from web3 and as hex strings from JSON."""
    if isinstance(value, str):
        value = value.lower()
        return value if value.startswith("0x") else f"0x{value}"
    return Web3.to_hex(value).lower()


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return Web3.to_bytes(hexstr=value)
    return bytes(value)


async def get_transaction_receipt(w3: AsyncWeb3, tx_hash: str) -> Mapping[str, Any]:
    logger.debug(f"Fetching transaction receipt for {tx_hash}")
    return await w3.eth.get_transaction_receipt(tx_hash)


def find_prompt_created_log(receipt: Mapping[str, Any], contract_address: str) -> Optional[Mapping[str, Any]]:
    """
    Returns the first log emitted by the prompt contract whose first topic is
    the PromptCreated signature, or None when the receipt has no such log.
    """
    contract_address = contract_address.lower()
    for log in receipt.get("logs", []):
        topics = log.get("topics") or []
        if not topics:
            continue
        if str(log.get("address", "")).lower() != contract_address:
            continue
        if _as_hex(topics[0]) == PROMPT_CREATED_TOPIC:
            return log
    return None


def decode_prompt_created(log: Mapping[str, Any]) -> PromptCreatedEvent:
    """Decodes a PromptCreated log. Raises ValueError on a malformed log."""
    topics = [_as_hex(topic) for topic in log.get("topics") or []]
    if len(topics) < 3 or topics[0] != PROMPT_CREATED_TOPIC:
        raise ValueError("Failed to decode event args")

    prompt_id = int(topics[1], 16)
    author = Web3.to_checksum_address("0x" + topics[2][-40:])
    try:
        content, expires_at = abi_decode(PROMPT_CREATED_DATA_TYPES, _as_bytes(log.get("data", b"")))
    except Exception as e:
        raise ValueError(f"Failed to decode event args: {e}") from e

    return PromptCreatedEvent(
        prompt_id=str(prompt_id),
        author=author,
        content=content,
        expires_at=expires_at,
    )
