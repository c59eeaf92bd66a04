from pydantic import BaseModel
from typing import Optional, List
from crisis_detection.alerts import AlertStatus


class RiskAssessment(BaseModel):
    level: int
    category: str
    severity: int
    matched_keywords: List[str] = []
    suggestions: List[str] = []


class MoodEntryRequest(BaseModel):
    mood_level: int
    notes: Optional[str] = None

class MoodEntryInfo(BaseModel):
    entry_id: int
    mood_level: int
    notes: Optional[str] = None
    created_at: Optional[str] = None

class MoodEntryResponse(BaseModel):
    success: bool
    entry: MoodEntryInfo
    crisis_detected: bool = False
    alert_queued: bool = False
    risk: Optional[RiskAssessment] = None
    message: str

class MoodEntryListResponse(BaseModel):
    success: bool
    data: List[MoodEntryInfo] = []
    count: int


class PreviewRequest(BaseModel):
    text: str

class PreviewResponse(BaseModel):
    analyzed: bool
    crisis_response: bool = False
    risk: Optional[RiskAssessment] = None


class AlertSummary(BaseModel):
    alert_id: int
    user_id: str
    student: Optional[str] = None
    alert_type: str
    severity_level: int
    status: str
    description: Optional[str] = None
    keywords: List[str] = []
    priority: str
    created_at: Optional[str] = None

class AlertListResponse(BaseModel):
    success: bool
    data: List[AlertSummary] = []
    count: int

class AlertStatusUpdateRequest(BaseModel):
    status: AlertStatus

class AlertStatusUpdateResponse(BaseModel):
    success: bool
    alert_id: int
    status: str
