from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.base import Base

class Alert(Base):
    __tablename__ = "alerts"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    address = Column(String)
    city = Column(String, index=True)
    province = Column(String)
    alert_type = Column(String, index=True, nullable=False)
    source = Column(String, nullable=False)
    status = Column(String, nullable=False, default="ACTIVE")
    priority = Column(String, nullable=False, default="MEDIUM")
    opportunity_score = Column(Integer, nullable=False)
    timeline_months = Column(Integer, nullable=False)
    # unique: a filing produces at most one alert
    court_filing_id = Column(String, ForeignKey("court_filings.id"), unique=True, index=True, nullable=False)
    court_file_number = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    court_filing = relationship("CourtFiling", back_populates="alert")
