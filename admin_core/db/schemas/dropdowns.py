from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import LanguageSummary

DROPDOWN_TYPE_PATTERN = r'^[a-zA-Z0-9_-]+$'


def normalize_dropdown_type(value: str) -> str:
    return value.strip().lower()


class ManageDropdownCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    dropdown_type: str = Field(min_length=1, max_length=50, pattern=DROPDOWN_TYPE_PATTERN)
    country_short_code: str | None = None
    is_default: Literal['YES', 'NO'] | None = None
    status: bool = True
    # public id or internal key of the variant to return; defaults to the default language
    language_id: str | None = None
    # restrict fan-out to these languages; all active languages when omitted
    language_ids: list[str] | None = None

    @field_validator('dropdown_type', mode='before')
    @classmethod
    def _normalize_type(cls, value):
        return normalize_dropdown_type(value) if isinstance(value, str) else value

    @field_validator('name')
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()


class ManageDropdownUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    country_short_code: str | None = None
    is_default: Literal['YES', 'NO'] | None = None
    status: bool | None = None


class ManageDropdown(BaseModel):
    id: str
    public_id: str
    name: str
    unique_code: int
    dropdown_type: str
    country_short_code: str | None = None
    is_default: str | None = None
    language_id: str | LanguageSummary
    status: bool = True
    use_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
