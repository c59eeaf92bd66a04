# app/mood_handler.py - Mood entry submission with crisis detection

from typing import List, Optional, Tuple
import uuid
from sqlalchemy.orm import Session
from fastapi import HTTPException
from app.config import settings
from app.database import SessionLocal
from app.models import MoodEntry
from app.schemas import MoodEntryRequest, MoodEntryResponse, MoodEntryInfo, RiskAssessment
from crisis_detection import CrisisDetector, ScoreResult, get_detector, to_alert
from services.alerts.dispatcher import AlertDispatcher, DeliveryResult
from services.alerts.storage import SqlAlchemyAlertStore
import logging


_dispatcher: Optional[AlertDispatcher] = None

def get_alert_dispatcher() -> AlertDispatcher:
    """Get singleton alert dispatcher backed by the application database"""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = AlertDispatcher(
            SqlAlchemyAlertStore(SessionLocal),
            attempts=settings.alert_write_attempts,
            retry_delay=settings.alert_retry_delay_seconds,
        )
    return _dispatcher


def risk_assessment(result: ScoreResult) -> RiskAssessment:
    return RiskAssessment(**result.to_dict())


def entry_info(entry: MoodEntry) -> MoodEntryInfo:
    return MoodEntryInfo(
        entry_id=entry.entry_id,
        mood_level=entry.mood_level,
        notes=entry.notes,
        created_at=entry.created_at.isoformat() if entry.created_at else None,
    )


class MoodEntryHandler:
    """
    Saves mood entries and runs crisis detection on their notes.

    The mood entry is always written first. Crisis detection runs afterwards
    and can only add to the response; its failures are logged and never undo
    the entry.
    """

    def __init__(
        self,
        db: Session,
        dispatcher: AlertDispatcher,
        detector: Optional[CrisisDetector] = None
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.detector = detector or get_detector()
        self.logger = logging.getLogger(__name__)

    async def process_request(self, request: MoodEntryRequest, user_id: uuid.UUID) -> MoodEntryResponse:
        """Main entry point for a mood submission"""
        if request.mood_level < 1 or request.mood_level > 5:
            raise HTTPException(status_code=400, detail="Mood level (1-5) is required")

        entry = self.create_entry(request, user_id)
        await self.flush_queued_alerts()
        result, delivery = await self.check_crisis(entry.notes, user_id)

        crisis_detected = delivery is not None
        return MoodEntryResponse(
            success=True,
            entry=entry_info(entry),
            crisis_detected=crisis_detected,
            alert_queued=bool(delivery and delivery.queued),
            risk=risk_assessment(result) if result else None,
            message="Mood entry added successfully"
        )

    def create_entry(self, request: MoodEntryRequest, user_id: uuid.UUID) -> MoodEntry:
        try:
            entry = MoodEntry(
                user_id=user_id,
                mood_level=request.mood_level,
                notes=request.notes or None
            )
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
            self.logger.info(f"Mood entry {entry.entry_id} created for user {user_id}")
            return entry
        except Exception as e:
            self.logger.error(f"Error creating mood entry for user {user_id}: {str(e)}")
            self.db.rollback()
            raise HTTPException(status_code=500, detail="Failed to add mood entry")

    async def check_crisis(
        self,
        notes: Optional[str],
        user_id: uuid.UUID
    ) -> Tuple[Optional[ScoreResult], Optional[DeliveryResult]]:
        """Score the notes and deliver an alert when the score qualifies"""
        if not notes or not notes.strip():
            return None, None

        try:
            result = self.detector.check(notes)
            alert = to_alert(result, user_id, notes)
        except Exception as e:
            self.logger.error(f"Crisis detection error for user {user_id}: {str(e)}")
            return None, None

        if alert is None:
            self.logger.debug(f"No crisis alert for user {user_id} (level: {result.level})")
            return result, None

        self.logger.warning(
            f"CRISIS ALERT: User {user_id} - Severity {alert.severity_level} - {alert.alert_type.value}"
        )
        try:
            delivery = await self.dispatcher.deliver(alert)
        except Exception as e:
            self.logger.error(f"Crisis alert delivery error for user {user_id}: {str(e)}")
            delivery = DeliveryResult(success=False, error=str(e))
        return result, delivery

    async def flush_queued_alerts(self) -> None:
        """Drain alerts left over from an earlier store outage"""
        if not self.dispatcher.pending:
            return
        try:
            await self.dispatcher.flush_pending()
        except Exception as e:
            self.logger.error(f"Error flushing queued crisis alerts: {str(e)}")


def list_entries(db: Session, user_id: uuid.UUID, limit: int = 50) -> List[MoodEntryInfo]:
    entries = db.query(MoodEntry).filter(
        MoodEntry.user_id == user_id
    ).order_by(MoodEntry.created_at.desc(), MoodEntry.entry_id.desc()).limit(limit).all()
    return [entry_info(e) for e in entries]
