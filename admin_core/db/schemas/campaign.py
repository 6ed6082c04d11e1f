from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CampaignFaqBase(BaseModel):
    question_id: str | None = None
    answer: str | None = None
    custom_question: str | None = None
    custom_answer: str | None = None


class CampaignFaqCreate(CampaignFaqBase):
    pass


class CampaignFaqUpdate(CampaignFaqBase):
    pass


class CampaignFaq(CampaignFaqBase):
    id: str
    public_id: str
    equity_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class LeadInvestorBase(BaseModel):
    investor_photo: str = Field(min_length=1, max_length=500)
    name: str = Field(min_length=1, max_length=255)
    investor_type: str = Field(min_length=1, max_length=100)
    bio: str = Field(min_length=1)


class LeadInvestorCreate(LeadInvestorBase):
    pass


class LeadInvestorUpdate(BaseModel):
    investor_photo: str | None = Field(default=None, min_length=1, max_length=500)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    investor_type: str | None = Field(default=None, min_length=1, max_length=100)
    bio: str | None = Field(default=None, min_length=1)


class LeadInvestor(LeadInvestorBase):
    id: str
    public_id: str
    equity_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
