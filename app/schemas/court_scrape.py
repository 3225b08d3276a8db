from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class CourtScrapeRequest(BaseModel):
    secret: str
    region: str = "gta"

class CourtScrapeStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_cases_processed: int = Field(alias="totalCasesProcessed")
    new_alerts_generated: int = Field(alias="newAlertsGenerated")
    feeds_processed: int = Field(alias="feedsProcessed")
    errors: int

class CourtScrapeResponse(BaseModel):
    success: bool
    message: str
    stats: CourtScrapeStats
    errors: Optional[List[str]] = None
