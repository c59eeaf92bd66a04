from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from app.schemas import (
    PreviewRequest, PreviewResponse, AlertSummary, AlertListResponse,
    AlertStatusUpdateRequest, AlertStatusUpdateResponse
)
from app.auth import verify_token, require_roles
from app.config import settings
from app.database import get_db
from app.models import CrisisAlertRecord, User
from app.mood_handler import risk_assessment
from crisis_detection import AlertStatus, get_detector
from crisis_detection.alerts import extract_keywords_from_description
import logging
import uuid

router = APIRouter(prefix="/api/crisis", tags=["crisis"])
logger = logging.getLogger(__name__)

counselor_access = require_roles("counselor", "admin")


@router.post("/preview", response_model=PreviewResponse)
async def preview_text(
    request: PreviewRequest,
    user_id: uuid.UUID = Depends(verify_token)
):
    """Live risk feedback for in-progress text. Never creates alerts."""
    if len(request.text) <= settings.preview_min_length:
        return PreviewResponse(analyzed=False)

    result = get_detector().check(request.text)
    return PreviewResponse(
        analyzed=True,
        crisis_response=result.requires_crisis_response,
        risk=risk_assessment(result)
    )


def alert_summary(alert: CrisisAlertRecord, student: Optional[User]) -> AlertSummary:
    return AlertSummary(
        alert_id=alert.alert_id,
        user_id=str(alert.user_id),
        student=student.name if student else None,
        alert_type=alert.alert_type,
        severity_level=alert.severity_level,
        status=alert.status,
        description=alert.description,
        keywords=extract_keywords_from_description(alert.description),
        priority="critical" if alert.severity_level >= 4 else "high",
        created_at=alert.created_at.isoformat() if alert.created_at else None
    )


@router.get("/alerts", response_model=AlertListResponse)
async def list_alerts(
    status_filter: Optional[AlertStatus] = Query(None, alias="status"),
    current_user: User = Depends(counselor_access),
    db: Session = Depends(get_db)
):
    query = db.query(CrisisAlertRecord, User).outerjoin(
        User, CrisisAlertRecord.user_id == User.user_id
    )
    if status_filter is not None:
        query = query.filter(CrisisAlertRecord.status == status_filter.value)

    rows = query.order_by(
        CrisisAlertRecord.created_at.desc(),
        CrisisAlertRecord.alert_id.desc()
    ).all()

    alerts = [alert_summary(alert, student) for alert, student in rows]
    return AlertListResponse(success=True, data=alerts, count=len(alerts))


@router.patch("/alerts/{alert_id}", response_model=AlertStatusUpdateResponse)
async def update_alert_status(
    alert_id: int,
    request: AlertStatusUpdateRequest,
    current_user: User = Depends(counselor_access),
    db: Session = Depends(get_db)
):
    alert = db.query(CrisisAlertRecord).filter(CrisisAlertRecord.alert_id == alert_id).first()
    if not alert:
        raise HTTPException(status_code=404, detail="Crisis alert not found")

    try:
        alert.status = request.status.value
        db.commit()
        logger.info(
            f"Crisis alert {alert_id} moved to '{request.status.value}' by {current_user.user_type} {current_user.user_id}"
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating crisis alert {alert_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update crisis alert"
        )

    return AlertStatusUpdateResponse(success=True, alert_id=alert_id, status=alert.status)
