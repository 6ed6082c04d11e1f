from sqlalchemy import Column, String, DateTime, Boolean, BigInteger, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc, new_internal_key


class Slider(Base):
    __tablename__ = 'sliders'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    # shared by every language variant of one slide
    unique_code = Column(BigInteger, nullable=False)
    slider_image = Column(String(500), nullable=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    button_title = Column(String(100), nullable=False)
    button_link = Column(String(500), nullable=False)
    language_id = Column(String(36), ForeignKey('languages.id'), nullable=False)
    custom_color = Column(Boolean, nullable=False, default=False)
    title_color = Column(String(7), nullable=False, default='#000000')
    description_color = Column(String(7), nullable=False, default='#000000')
    button_title_color = Column(String(7), nullable=False, default='#FFFFFF')
    button_background = Column(String(7), nullable=False, default='#007BFF')
    description_two = Column(Text, nullable=True)
    button_title_two = Column(String(100), nullable=True)
    button_link_two = Column(String(500), nullable=True)
    description_two_color = Column(String(7), nullable=False, default='#666666')
    button_two_color = Column(String(7), nullable=False, default='#FFFFFF')
    button_background_two = Column(String(7), nullable=False, default='#28A745')
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    language = relationship("Language", back_populates="sliders")

    __table_args__ = (
        Index('idx_sliders_unique_code', 'unique_code'),
        Index('idx_sliders_language_status', 'language_id', 'status'),
        UniqueConstraint('unique_code', 'language_id', name='uq_sliders_unique_code_language'),
    )
