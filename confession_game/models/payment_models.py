from pydantic import BaseModel, Field, field_validator


class PaymentCreate(BaseModel):
    walletAddress: str = Field(min_length=1)
    userFid: str = Field(min_length=1)
    txHash: str = Field(min_length=1)

    @field_validator("userFid", mode="before")
    @classmethod
    def fid_as_string(cls, value):
        # Clients send the fid as a JSON number; the paid-set stores strings.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value) if value else ""
        return value
