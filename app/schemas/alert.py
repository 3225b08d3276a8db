from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

class AlertType(str, Enum):
    POWER_OF_SALE = "POWER_OF_SALE"
    ESTATE_SALE = "ESTATE_SALE"
    DEVELOPMENT_APPLICATION = "DEVELOPMENT_APPLICATION"
    MUNICIPAL_PERMIT = "MUNICIPAL_PERMIT"
    PROBATE_FILING = "PROBATE_FILING"
    TAX_SALE = "TAX_SALE"

class AlertStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RESOLVED = "RESOLVED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"

class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

class DataSource(str, Enum):
    ONTARIO_COURT_BULLETINS = "ONTARIO_COURT_BULLETINS"
    ESTATE_FILINGS = "ESTATE_FILINGS"
    MUNICIPAL_APPLICATIONS = "MUNICIPAL_APPLICATIONS"

class AlertBase(BaseModel):
    title: str
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    alert_type: AlertType
    source: DataSource = DataSource.ONTARIO_COURT_BULLETINS
    status: AlertStatus = AlertStatus.ACTIVE
    priority: Priority = Priority.MEDIUM
    opportunity_score: int = Field(ge=60, le=100)
    timeline_months: int = Field(ge=3, le=9)
    court_filing_id: str
    court_file_number: Optional[str] = None

class AlertCreate(AlertBase):
    pass

class Alert(AlertBase):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
