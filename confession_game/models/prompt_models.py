from pydantic import BaseModel


class StoredPrompt(BaseModel):
    id: str
    content: str
    authorFid: int
    createdAt: int
    expiresAt: int
