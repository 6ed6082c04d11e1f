from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CurrencyBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=10)
    symbol: str = Field(min_length=1, max_length=10)
    status: bool = True

    @field_validator('code')
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.strip().upper()


class CurrencyCreate(CurrencyBase):
    pass


class CurrencyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    code: str | None = Field(default=None, min_length=1, max_length=10)
    symbol: str | None = Field(default=None, min_length=1, max_length=10)
    status: bool | None = None

    @field_validator('code')
    @classmethod
    def _upper_code(cls, value: str | None) -> str | None:
        return value.strip().upper() if value else value


class Currency(CurrencyBase):
    id: str
    public_id: str
    use_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
