from sqlalchemy import Column, String, DateTime, Boolean, Integer, Index
from .base import Base, now_utc, new_internal_key


class Currency(Base):
    __tablename__ = 'currencies'
    id = Column(String(36), primary_key=True, default=new_internal_key)
    public_id = Column(String(36), nullable=False, unique=True)
    name = Column(String(100), nullable=False, unique=True)
    code = Column(String(10), nullable=False, unique=True)
    symbol = Column(String(10), nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    use_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_currencies_status', 'status'),
    )
