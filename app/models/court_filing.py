from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.base import Base

class CourtFiling(Base):
    __tablename__ = "court_filings"

    id = Column(String, primary_key=True, index=True)
    guid = Column(String, unique=True, index=True, nullable=False)
    title = Column(String, nullable=False)
    court = Column(String, index=True, nullable=False)
    source = Column(String, nullable=False)
    publish_date = Column(DateTime(timezone=True), nullable=False)
    case_url = Column(String, unique=True, index=True, nullable=False)
    summary = Column(Text)
    is_processed = Column(Boolean, nullable=False, default=False)
    classified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    alert = relationship("Alert", back_populates="court_filing", uselist=False)
