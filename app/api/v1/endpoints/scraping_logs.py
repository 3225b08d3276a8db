from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loguru import logger

from app.core.database import get_db
from app.schemas.scraping_log import ScrapingLog as ScrapingLogSchema
from app.services.scraping_log_service import ScrapingLogService

router = APIRouter()

@router.get("/", response_model=List[ScrapingLogSchema])
def get_scraping_logs(db: Session = Depends(get_db)):
    """
    Get all scraping logs from the database
    """
    try:
        return ScrapingLogService(db).get_all_logs()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching scraping logs: {e}")
        raise HTTPException(status_code=500, detail="Error fetching scraping logs")
