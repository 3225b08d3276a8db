from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func
from app.core.base import Base

class ScrapingLog(Base):
    """One row per court feed per ingestion pass"""
    __tablename__ = "scraping_log"

    id = Column(String, primary_key=True, index=True)
    date_time = Column(DateTime, nullable=False)
    source = Column(String, nullable=False, index=True)
    state = Column(String, nullable=False)
    candidates_seen = Column(Integer, nullable=False, default=0)
    total_records = Column(Integer, nullable=False)
    alerts_generated = Column(Integer, nullable=False, default=0)
    success_status = Column(String, nullable=False)
    error_message = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
