from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.schemas import MoodEntryRequest, MoodEntryResponse, MoodEntryListResponse
from app.auth import get_current_user
from app.database import get_db
from app.models import User
from app.mood_handler import MoodEntryHandler, get_alert_dispatcher, list_entries
from services.alerts.dispatcher import AlertDispatcher
import logging

router = APIRouter(prefix="/api", tags=["mood"])
logger = logging.getLogger(__name__)

@router.post("/mood", response_model=MoodEntryResponse)
async def create_mood_entry(
    request: MoodEntryRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    dispatcher: AlertDispatcher = Depends(get_alert_dispatcher)
):
    try:
        handler = MoodEntryHandler(db, dispatcher)
        return await handler.process_request(request, current_user.user_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Mood entry error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add mood entry"
        )

@router.get("/mood", response_model=MoodEntryListResponse)
async def list_mood_entries(
    limit: int = 50,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if limit < 1 or limit > 200:
        raise HTTPException(status_code=400, detail="limit must be between 1 and 200")
    entries = list_entries(db, current_user.user_id, limit)
    return MoodEntryListResponse(success=True, data=entries, count=len(entries))
