from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PromptLookupError(Exception):
    pass


class UntrustedData(BaseModel):
    model_config = ConfigDict(extra="allow")

    state: str = Field(min_length=1)

    @field_validator("state", mode="before")
    @classmethod
    def state_as_string(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class FrameActionRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    untrustedData: UntrustedData


class PromptAuthor(BaseModel):
    username: Optional[str] = None


class PromptSummary(BaseModel):
    content: str
    author: Optional[PromptAuthor] = None
    totalConfessions: Optional[int] = 0

    @field_validator("totalConfessions", mode="after")
    @classmethod
    def null_confessions_as_zero(cls, value):
        return value or 0
