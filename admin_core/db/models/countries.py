from sqlalchemy import Column, String, DateTime, Boolean, Integer, Index, CheckConstraint
from .base import Base, now_utc, new_internal_key


class Country(Base):
    __tablename__ = 'countries'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    name = Column(String(100), nullable=False, unique=True)
    iso2 = Column(String(2), nullable=False)
    iso3 = Column(String(3), nullable=False)
    flag = Column(String(500), nullable=True)
    is_default = Column(String(3), nullable=False, default='NO')
    status = Column(Boolean, nullable=False, default=True)
    use_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_countries_iso2', 'iso2'),
        CheckConstraint("is_default in ('YES','NO')", name='ck_countries_is_default'),
    )
