from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, SmallInteger, Uuid, CheckConstraint
from sqlalchemy.sql import func
from app.database import Base
import uuid


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(256), nullable=True)
    email = Column(String(256), unique=True, nullable=False)
    user_type = Column(String(20), default="student")  # student/counselor/admin
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    status = Column(SmallInteger, default=1)


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    entry_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.user_id"), nullable=False, index=True)
    mood_level = Column(SmallInteger, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("mood_level BETWEEN 1 AND 5", name="ck_mood_level_range"),
    )


class CrisisAlertRecord(Base):
    __tablename__ = "crisis_alerts"

    alert_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.user_id"), nullable=False, index=True)
    alert_type = Column(String(32), nullable=False)
    severity_level = Column(SmallInteger, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("severity_level BETWEEN 1 AND 5", name="ck_alert_severity_range"),
    )
