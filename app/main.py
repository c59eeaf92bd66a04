from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import engine, Base
from app import mood_handler
from app.api import mood, crisis
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    dispatcher = mood_handler.get_alert_dispatcher()
    yield
    # last chance for alerts queued during a store outage
    if dispatcher.pending:
        logger.warning(f"Flushing {len(dispatcher.pending)} queued crisis alerts before shutdown")
        await dispatcher.flush_pending()
        dispatcher.log_undelivered()


app = FastAPI(
    title="MindCare Crisis API",
    description="Mood journaling with crisis risk detection",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(mood.router)
app.include_router(crisis.router)
