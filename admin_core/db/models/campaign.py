from sqlalchemy import Column, String, DateTime, Text, Index
from .base import Base, now_utc, new_internal_key


class CampaignFaq(Base):
    __tablename__ = 'campaign_faqs'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    equity_id = Column(String(36), nullable=False)
    question_id = Column(String(36), nullable=True)
    answer = Column(Text, nullable=True)
    custom_question = Column(Text, nullable=True)
    custom_answer = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_campaign_faqs_equity_id', 'equity_id'),
    )


class LeadInvestor(Base):
    __tablename__ = 'lead_investors'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    equity_id = Column(String(36), nullable=False)
    investor_photo = Column(String(500), nullable=False)
    name = Column(String(255), nullable=False)
    investor_type = Column(String(100), nullable=False)
    bio = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_lead_investors_equity_id', 'equity_id'),
    )
