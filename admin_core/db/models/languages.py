from sqlalchemy import Column, String, DateTime, Boolean, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_internal_key


class Language(Base):
    __tablename__ = 'languages'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    name = Column(String(100), nullable=False, unique=True)
    folder = Column(String(20), nullable=False, unique=True)
    iso2 = Column(String(2), nullable=False)
    iso3 = Column(String(3), nullable=False)
    flag_image = Column(String(500), nullable=True)
    direction = Column(String(3), nullable=False, default='ltr')
    status = Column(Boolean, nullable=False, default=True)
    is_default = Column(String(3), nullable=False, default='NO')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    manage_dropdowns = relationship("ManageDropdown", back_populates="language")
    email_templates = relationship("EmailTemplate", back_populates="language")
    meta_setting = relationship("MetaSetting", back_populates="language", uselist=False)
    sliders = relationship("Slider", back_populates="language")

    __table_args__ = (
        Index('idx_languages_status', 'status'),
        Index('idx_languages_is_default', 'is_default'),
        CheckConstraint("direction in ('ltr','rtl')", name='ck_languages_direction'),
        CheckConstraint("is_default in ('YES','NO')", name='ck_languages_is_default'),
    )
