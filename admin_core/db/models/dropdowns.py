from sqlalchemy import Column, String, DateTime, Boolean, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_internal_key


class ManageDropdown(Base):
    __tablename__ = 'manage_dropdowns'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    unique_code = Column(Integer, nullable=False)
    dropdown_type = Column(String(50), nullable=False)
    country_short_code = Column(String(10), nullable=True)
    is_default = Column(String(3), nullable=True)
    language_id = Column(String(36), ForeignKey('languages.id'), nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    use_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    language = relationship("Language", back_populates="manage_dropdowns")

    __table_args__ = (
        Index('idx_manage_dropdowns_type', 'dropdown_type'),
        Index('idx_manage_dropdowns_language_id', 'language_id'),
        Index('idx_manage_dropdowns_unique_code', 'unique_code'),
        Index('idx_manage_dropdowns_type_language', 'dropdown_type', 'language_id'),
        Index('idx_manage_dropdowns_type_status', 'dropdown_type', 'status'),
    )
