from datetime import datetime
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.scraping_log import ScrapingLog
from app.services.court_ingestion_service import IngestionResult, SourceResult
import uuid
from loguru import logger

class ScrapingLogService:
    def __init__(self, db: Session):
        self.db = db

    def build_log_entry(self, source: SourceResult) -> ScrapingLog:
        return ScrapingLog(
            id=str(uuid.uuid4()),
            date_time=datetime.now(),
            source=source.source,
            state=source.state.value,
            candidates_seen=source.candidates_seen,
            total_records=source.filings_created,
            alerts_generated=source.alerts_generated,
            success_status=str(source.error is None),
            error_message=source.error or ""
        )

    def record_ingestion(self, ingestion: IngestionResult) -> List[ScrapingLog]:
        """Save one log entry per feed of an ingestion pass"""
        entries = [self.build_log_entry(source) for source in ingestion.sources]
        try:
            self.db.add_all(entries)
            self.db.commit()
            logger.info(f"Saved {len(entries)} scraping log entries")
            return entries
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating scraping log entries: {str(e)}")
            logger.exception("Full traceback:")
            return []

    def get_all_logs(self) -> List[ScrapingLog]:
        """Get scraping logs, newest first"""
        return self.db.query(ScrapingLog).order_by(ScrapingLog.date_time.desc()).all()
