# services/alerts/storage.py - Persistence collaborators for crisis alerts

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Callable
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.models import CrisisAlertRecord
from crisis_detection.alerts import CrisisAlert


class AlertStore(ABC):
    """Abstract base class for anything that can durably store a crisis alert"""

    @abstractmethod
    def insert_alert(self, alert: CrisisAlert) -> int:
        """Persist alert and return its id. Raises on failure."""
        pass


class SqlAlchemyAlertStore(AlertStore):
    """Writes crisis alerts to the crisis_alerts table, one session per write"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def insert_alert(self, alert: CrisisAlert) -> int:
        db = self.session_factory()
        try:
            record = CrisisAlertRecord(
                user_id=uuid.UUID(alert.subject_id),
                alert_type=alert.alert_type.value,
                severity_level=alert.severity_level,
                description=alert.description,
                status=alert.status.value,
            )
            db.add(record)
            db.commit()
            db.refresh(record)
            logging.info(f"Crisis alert {record.alert_id} stored for user {alert.subject_id}")
            return record.alert_id
        except SQLAlchemyError as e:
            db.rollback()
            logging.error(f"Database error storing crisis alert for user {alert.subject_id}: {str(e)}")
            raise
        finally:
            db.close()
