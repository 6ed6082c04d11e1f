from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LanguageBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    folder: str = Field(min_length=1, max_length=20)
    iso2: str = Field(min_length=2, max_length=2)
    iso3: str = Field(min_length=3, max_length=3)
    flag_image: str | None = None
    direction: Literal['ltr', 'rtl'] = 'ltr'
    status: bool = True
    is_default: Literal['YES', 'NO'] = 'NO'

    @field_validator('iso2', 'iso3')
    @classmethod
    def _upper_iso(cls, value: str) -> str:
        return value.upper()


class LanguageCreate(LanguageBase):
    pass


class LanguageUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    folder: str | None = Field(default=None, min_length=1, max_length=20)
    iso2: str | None = Field(default=None, min_length=2, max_length=2)
    iso3: str | None = Field(default=None, min_length=3, max_length=3)
    flag_image: str | None = None
    direction: Literal['ltr', 'rtl'] | None = None
    status: bool | None = None
    is_default: Literal['YES', 'NO'] | None = None

    @field_validator('iso2', 'iso3')
    @classmethod
    def _upper_iso(cls, value: str | None) -> str | None:
        return value.upper() if value else value


class Language(LanguageBase):
    id: str
    public_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
