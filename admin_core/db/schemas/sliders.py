from datetime import datetime
from urllib.parse import urlparse
from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .common import LanguageSummary

HEX_COLOR_PATTERN = r'^#[0-9A-Fa-f]{6}$'


def validate_link(value: str) -> str:
    """Accept site-relative paths and absolute URLs."""
    if value.startswith('/'):
        return value
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid URL: {value}")
    return value


Link = Annotated[str, AfterValidator(validate_link)]


class SliderContent(BaseModel):
    slider_image: str | None = None
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    button_title: str = Field(min_length=1, max_length=100)
    button_link: Link = Field(min_length=1, max_length=500)
    custom_color: bool = False
    title_color: str = Field(default='#000000', pattern=HEX_COLOR_PATTERN)
    description_color: str = Field(default='#000000', pattern=HEX_COLOR_PATTERN)
    button_title_color: str = Field(default='#FFFFFF', pattern=HEX_COLOR_PATTERN)
    button_background: str = Field(default='#007BFF', pattern=HEX_COLOR_PATTERN)
    description_two: str | None = Field(default=None, max_length=1000)
    button_title_two: str | None = Field(default=None, max_length=100)
    button_link_two: Link | None = Field(default=None, max_length=500)
    description_two_color: str = Field(default='#666666', pattern=HEX_COLOR_PATTERN)
    button_two_color: str = Field(default='#FFFFFF', pattern=HEX_COLOR_PATTERN)
    button_background_two: str = Field(default='#28A745', pattern=HEX_COLOR_PATTERN)
    status: bool = True


class SliderCreate(SliderContent):
    # public id or internal key of the variant to return; defaults to the default language
    language_id: str | None = None
    # restrict fan-out to these languages; all active languages when omitted
    language_ids: list[str] | None = None


class SliderUpdate(BaseModel):
    slider_image: str | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=1000)
    button_title: str | None = Field(default=None, min_length=1, max_length=100)
    button_link: Link | None = Field(default=None, min_length=1, max_length=500)
    custom_color: bool | None = None
    title_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    description_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    button_title_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    button_background: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    description_two: str | None = Field(default=None, max_length=1000)
    button_title_two: str | None = Field(default=None, max_length=100)
    button_link_two: Link | None = Field(default=None, max_length=500)
    description_two_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    button_two_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    button_background_two: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    status: bool | None = None


class Slider(SliderContent):
    id: str
    public_id: str
    unique_code: int
    language_id: str | LanguageSummary
    # stored values are trusted; only incoming payloads are validated
    title: str
    description: str
    button_title: str
    button_link: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
