# confession_game/models/confirm_models.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EventNotFoundError(Exception):
    pass


class UserLookupError(Exception):
    pass


class WrongNetworkError(Exception):
    pass


class ConfirmPageState(str, Enum):
    REDIRECT = "redirect"
    CONNECT_WALLET = "connect_wallet"
    WRONG_NETWORK = "wrong_network"
    READY = "ready"


class ConfirmationStatus(str, Enum):
    HANDLING = "handling"
    COMPLETED = "completed"
    EVENT_NOT_FOUND = "event_not_found"
    FAILED = "failed"


class ConfirmPromptRequest(BaseModel):
    txHash: str = Field(min_length=1)
    prompt: str = Field(min_length=1)
    walletAddress: str = Field(min_length=1)
    chainId: Optional[int] = None


class ConfirmationResult(BaseModel):
    txHash: str
    status: ConfirmationStatus
    promptId: Optional[str] = None
    redirectUrl: Optional[str] = None
    debugMessage: Optional[str] = None
    alreadyHandled: bool = False


class PromptCreatedEvent(BaseModel):
    prompt_id: str
    author: str
    content: str
    expires_at: int
