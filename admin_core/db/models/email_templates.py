from sqlalchemy import Column, String, DateTime, Boolean, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_internal_key


class EmailTemplate(Base):
    __tablename__ = 'email_templates'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    language_id = Column(String(36), ForeignKey('languages.id'), nullable=False)
    task = Column(String(100), nullable=False)
    sender_email = Column(String(255), nullable=False)
    reply_email = Column(String(255), nullable=False)
    sender_name = Column(String(200), nullable=False)
    subject = Column(String(500), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    language = relationship("Language", back_populates="email_templates")

    __table_args__ = (
        UniqueConstraint('task', 'language_id', name='uq_email_templates_task_language'),
        Index('idx_email_templates_task', 'task'),
        Index('idx_email_templates_status', 'status'),
    )
