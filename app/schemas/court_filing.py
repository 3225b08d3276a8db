from enum import Enum
from typing import Optional
from pydantic import BaseModel
from datetime import datetime

class CourtType(str, Enum):
    ONSC = "ONSC"
    ONCA = "ONCA"
    ONCJ = "ONCJ"
    ONSCDC = "ONSCDC"
    OLT = "OLT"

class CourtFilingBase(BaseModel):
    guid: str
    title: str
    court: CourtType
    source: str
    publish_date: datetime
    case_url: str
    summary: Optional[str] = None

class CourtFilingCreate(CourtFilingBase):
    is_processed: bool = False
    classified: bool = False

class CourtFiling(CourtFilingBase):
    id: str
    is_processed: bool
    classified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
