from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import DuplicateFilingError, StoreError
from app.models.court_filing import CourtFiling
from app.schemas.court_filing import CourtFilingCreate
from app.services.stores import FilingStore
import uuid
from loguru import logger

class CourtFilingService(FilingStore):
    def __init__(self, db: Session):
        self.db = db

    async def exists(self, url: str, guid: Optional[str] = None) -> bool:
        """Check if a filing with this URL or GUID already exists in the database"""
        try:
            match = CourtFiling.case_url == url
            if guid:
                match = or_(match, CourtFiling.guid == guid)
            exists = self.db.query(CourtFiling.id).filter(match).first() is not None
            logger.debug(f"Filing {url} {'exists' if exists else 'does not exist'}")
            return exists
        except SQLAlchemyError as e:
            logger.error(f"Error checking if filing exists {url}: {str(e)}")
            raise StoreError(f"Could not check filing {url}: {e}") from e

    async def create(self, filing: CourtFilingCreate) -> CourtFiling:
        """Create a new court filing in the database"""
        try:
            logger.info(f"Creating new court filing: {filing.case_url}")

            case_data = filing.model_dump()
            case_data["court"] = filing.court.value

            db_filing = CourtFiling(
                id=str(uuid.uuid4()),
                **case_data
            )

            self.db.add(db_filing)
            self.db.commit()
            self.db.refresh(db_filing)

            logger.info(f"Successfully created court filing: {db_filing.id}")
            return db_filing

        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Duplicate court filing {filing.case_url}: {str(e)}")
            raise DuplicateFilingError(f"Filing already stored: {filing.case_url}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating court filing {filing.case_url}: {str(e)}")
            logger.exception("Full traceback:")
            raise StoreError(f"Could not store filing {filing.case_url}: {e}") from e

    async def mark_classified(self, filing_id: str) -> None:
        """Set the classified flag on a filing"""
        try:
            updated = self.db.query(CourtFiling).filter(CourtFiling.id == filing_id).update({CourtFiling.classified: True})
            self.db.commit()
            if not updated:
                logger.warning(f"Court filing not found when marking classified: {filing_id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error marking court filing {filing_id} classified: {str(e)}")
            raise StoreError(f"Could not update filing {filing_id}: {e}") from e

    def get_court_filing(self, filing_id: str) -> Optional[CourtFiling]:
        """Get a court filing by id"""
        return self.db.query(CourtFiling).filter(CourtFiling.id == filing_id).first()

    def get_all_court_filings(self, skip: int = 0, limit: int = 100) -> List[CourtFiling]:
        """Get court filings, newest first"""
        return (
            self.db.query(CourtFiling)
            .order_by(CourtFiling.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
