from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.alert import Alert, AlertType
from app.services.alert_service import AlertService

router = APIRouter()

@router.get("/", response_model=List[Alert], operation_id="get_alerts")
def get_alerts(
    skip: int = 0,
    limit: int = 100,
    alert_type: Optional[AlertType] = None,
    db: Session = Depends(get_db)
):
    """Get alerts, highest opportunity score first"""
    service = AlertService(db)
    return service.get_all_alerts(skip=skip, limit=limit, alert_type=alert_type.value if alert_type else None)

@router.get("/{alert_id}", response_model=Alert, operation_id="get_alert_by_id")
def get_alert(
    alert_id: str,
    db: Session = Depends(get_db)
):
    """Get a specific alert by id"""
    service = AlertService(db)
    alert = service.get_alert(alert_id)
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert
