from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import StoreError
from app.models.alert import Alert
from app.schemas.alert import AlertCreate
from app.services.stores import AlertStore
import uuid
from loguru import logger

class AlertService(AlertStore):
    def __init__(self, db: Session):
        self.db = db

    async def create(self, alert: AlertCreate) -> Alert:
        """Create a new alert in the database"""
        try:
            logger.info(f"Creating {alert.alert_type.value} alert for filing {alert.court_filing_id}")

            db_alert = Alert(
                id=str(uuid.uuid4()),
                **alert.model_dump(mode="json")
            )

            self.db.add(db_alert)
            self.db.commit()
            self.db.refresh(db_alert)

            logger.info(f"Successfully created alert {db_alert.id} (score {db_alert.opportunity_score})")
            return db_alert

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating alert for filing {alert.court_filing_id}: {str(e)}")
            logger.exception("Full traceback:")
            raise StoreError(f"Could not store alert for filing {alert.court_filing_id}: {e}") from e

    def get_alert(self, alert_id: str) -> Optional[Alert]:
        """Get an alert by id"""
        return self.db.query(Alert).filter(Alert.id == alert_id).first()

    def get_all_alerts(self, skip: int = 0, limit: int = 100, alert_type: Optional[str] = None) -> List[Alert]:
        """Get alerts, highest opportunity first"""
        query = self.db.query(Alert)
        if alert_type:
            query = query.filter(Alert.alert_type == alert_type)
        return (
            query.order_by(Alert.opportunity_score.desc(), Alert.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
