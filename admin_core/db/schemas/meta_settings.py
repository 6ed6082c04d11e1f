from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

from .common import LanguageSummary


class MetaSettingContent(BaseModel):
    site_name: str = Field(min_length=1, max_length=255)
    meta_title: str = Field(min_length=1, max_length=255)
    meta_description: str = Field(min_length=1)
    meta_keyword: str = Field(min_length=1)
    og_title: str = Field(min_length=1, max_length=255)
    og_description: str = Field(min_length=1)
    og_image: str = Field(min_length=1, max_length=500)
    is_ai_generated_image: Literal['YES', 'NO'] = 'NO'


class MetaSettingCreate(MetaSettingContent):
    pass


class MetaSettingUpdate(BaseModel):
    site_name: str | None = Field(default=None, min_length=1, max_length=255)
    meta_title: str | None = Field(default=None, min_length=1, max_length=255)
    meta_description: str | None = None
    meta_keyword: str | None = None
    og_title: str | None = Field(default=None, min_length=1, max_length=255)
    og_description: str | None = None
    og_image: str | None = None
    is_ai_generated_image: Literal['YES', 'NO'] | None = None


class MetaSetting(MetaSettingContent):
    id: str
    public_id: str
    language_id: str | LanguageSummary
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
