# services/alerts/dispatcher.py - At-least-once delivery of crisis alerts

import asyncio
import logging
from collections import deque
from dataclasses import asdict, dataclass
from typing import Deque, List, Optional
from sqlalchemy import exc as sa_exc
from crisis_detection.alerts import CrisisAlert
from .storage import AlertStore

# Failures that mean the store is unreachable right now; anything else is a
# problem with the alert itself and will not succeed on a later attempt.
TRANSIENT_ERRORS = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
    ConnectionError,
    TimeoutError,
)


@dataclass
class DeliveryResult:
    """Result of handing an alert to the store"""
    success: bool
    alert_id: Optional[int] = None
    attempts: int = 0
    queued: bool = False
    permanent: bool = False
    error: Optional[str] = None


class AlertDispatcher:
    """
    Delivers crisis alerts to an AlertStore.

    Transient failures are retried with linear backoff. An alert that still
    cannot be written is kept in a pending queue, drained on every later
    delivery and on flush_pending(). Alerts the store rejects outright are
    never queued; they are logged at CRITICAL with their full payload so the
    queue cannot stall behind them.
    """

    def __init__(self, store: AlertStore, attempts: int = 3, retry_delay: float = 0.5):
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.store = store
        self.attempts = attempts
        self.retry_delay = retry_delay
        self.pending: Deque[CrisisAlert] = deque()
        self.logger = logging.getLogger(__name__)
        self._lock = asyncio.Lock()

    async def _write(self, alert: CrisisAlert) -> DeliveryResult:
        last_error = None
        for attempt in range(1, self.attempts + 1):
            try:
                alert_id = await asyncio.to_thread(self.store.insert_alert, alert)
                return DeliveryResult(success=True, alert_id=alert_id, attempts=attempt)
            except TRANSIENT_ERRORS as e:
                last_error = str(e)
                self.logger.error(
                    f"Crisis alert write failed for user {alert.subject_id} "
                    f"(attempt {attempt}/{self.attempts}): {last_error}"
                )
                if attempt < self.attempts:
                    await asyncio.sleep(self.retry_delay * attempt)
            except Exception as e:
                self.logger.critical(
                    f"Crisis alert rejected by store and NOT delivered: {type(e).__name__}: {str(e)} "
                    f"| alert: {asdict(alert)}"
                )
                return DeliveryResult(success=False, attempts=attempt, permanent=True, error=str(e))
        return DeliveryResult(success=False, attempts=self.attempts, error=last_error)

    async def flush_pending(self) -> List[DeliveryResult]:
        """Retry queued alerts in arrival order until the store fails transiently again"""
        results = []
        async with self._lock:
            while self.pending:
                alert = self.pending[0]
                result = await self._write(alert)
                results.append(result)
                if not result.success and not result.permanent:
                    break
                self.pending.popleft()
                if result.success:
                    self.logger.info(f"Queued crisis alert delivered for user {alert.subject_id}")
        return results

    async def deliver(self, alert: CrisisAlert) -> DeliveryResult:
        if self.pending:
            await self.flush_pending()

        result = await self._write(alert)
        if not result.success and not result.permanent:
            async with self._lock:
                self.pending.append(alert)
                queue_size = len(self.pending)
            result.queued = True
            self.logger.error(
                f"Crisis alert for user {alert.subject_id} queued after {result.attempts} failed attempts "
                f"({queue_size} pending)"
            )
        return result

    def log_undelivered(self) -> None:
        """Log every alert still queued, e.g. before the process exits"""
        for alert in self.pending:
            self.logger.critical(f"Crisis alert still undelivered: {asdict(alert)}")
