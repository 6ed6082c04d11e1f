from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CountryBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    iso2: str = Field(min_length=2, max_length=2)
    iso3: str = Field(min_length=3, max_length=3)
    flag: str | None = None
    is_default: Literal['YES', 'NO'] = 'NO'
    status: bool = True

    @field_validator('iso2', 'iso3')
    @classmethod
    def _upper_iso(cls, value: str) -> str:
        return value.upper()


class CountryCreate(CountryBase):
    pass


class CountryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    iso2: str | None = Field(default=None, min_length=2, max_length=2)
    iso3: str | None = Field(default=None, min_length=3, max_length=3)
    flag: str | None = None
    status: bool | None = None

    @field_validator('iso2', 'iso3')
    @classmethod
    def _upper_iso(cls, value: str | None) -> str | None:
        return value.upper() if value else value


class Country(CountryBase):
    id: str
    public_id: str
    use_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
