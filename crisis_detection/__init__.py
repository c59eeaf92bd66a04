# crisis_detection/__init__.py
from .detector import CrisisDetector, RiskCategory, ScoreResult, compressed_severity, get_detector, score
from .alerts import AlertStatus, AlertType, CrisisAlert, to_alert

__all__ = [
    'CrisisDetector',
    'RiskCategory',
    'ScoreResult',
    'compressed_severity',
    'get_detector',
    'score',
    'AlertStatus',
    'AlertType',
    'CrisisAlert',
    'to_alert',
]
