from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from .common import LanguageSummary

TASK_PATTERN = r'^[a-zA-Z0-9_-]+$'
EMAIL_PATTERN = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'


class EmailTemplateContent(BaseModel):
    sender_email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    reply_email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    sender_name: str = Field(min_length=1, max_length=200)
    subject: str = Field(min_length=1, max_length=500)
    message: str = Field(min_length=1)
    status: bool = True


class EmailTemplateCreate(EmailTemplateContent):
    task: str = Field(min_length=1, max_length=100, pattern=TASK_PATTERN)
    # public id or internal key; every active language gets a copy when omitted
    language_id: str | None = None


class EmailTemplateUpdate(BaseModel):
    """Task is fixed at creation and cannot be changed."""
    sender_email: str | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)
    reply_email: str | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)
    sender_name: str | None = Field(default=None, min_length=1, max_length=200)
    subject: str | None = Field(default=None, min_length=1, max_length=500)
    message: str | None = Field(default=None, min_length=1)
    status: bool | None = None


class EmailTemplate(BaseModel):
    id: str
    public_id: str
    language_id: str | LanguageSummary
    task: str
    sender_email: str
    reply_email: str
    sender_name: str
    subject: str
    message: str
    status: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
