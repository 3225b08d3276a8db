from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class ScrapingLog(BaseModel):
    id: str
    date_time: datetime
    source: str
    state: str
    candidates_seen: int = 0
    total_records: int
    alerts_generated: int = 0
    success_status: str
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "date_time": "2025-09-07T08:00:00",
                "source": "Ontario Superior Court of Justice",
                "state": "DONE",
                "candidates_seen": 5,
                "total_records": 3,
                "alerts_generated": 2,
                "success_status": "True",
                "error_message": "",
                "created_at": "2025-09-07T08:00:00"
            }
        }
