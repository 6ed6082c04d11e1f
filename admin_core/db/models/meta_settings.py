from sqlalchemy import Column, String, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_internal_key


class MetaSetting(Base):
    __tablename__ = 'meta_settings'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    language_id = Column(String(36), ForeignKey('languages.id'), nullable=False, unique=True)
    site_name = Column(String(255), nullable=False)
    meta_title = Column(String(255), nullable=False)
    meta_description = Column(Text, nullable=False)
    meta_keyword = Column(Text, nullable=False)
    og_title = Column(String(255), nullable=False)
    og_description = Column(Text, nullable=False)
    og_image = Column(String(500), nullable=False)
    is_ai_generated_image = Column(String(3), nullable=False, default='NO')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    language = relationship("Language", back_populates="meta_setting")

    __table_args__ = (
        CheckConstraint("is_ai_generated_image in ('YES','NO')", name='ck_meta_settings_ai_image'),
    )
