"""
Tym – Backend API
Start with: uvicorn main:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS, LOG_LEVEL
from db import init_db
from errors import TymError
from routers import calendar, events, reminders, sessions, sync, tasks, time_blocks, users

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    init_db()
    yield


app = FastAPI(
    title="Tym API",
    description="Tasks, calendar, time blocking and Pomodoro focus tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# Allow frontend to call this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TymError)
async def tym_error_handler(request: Request, exc: TymError):
    """Domain errors keep the same {"detail": ...} shape as HTTPException."""
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health():
    """Check that the API is running. Frontend can call this first."""
    return {"status": "ok", "message": "Tym API is running"}


@app.get("/")
def root():
    """Root welcome."""
    return {"app": "Tym", "docs": "/docs"}


app.include_router(users.router)
app.include_router(tasks.router)
app.include_router(events.router)
app.include_router(reminders.router)
app.include_router(time_blocks.router)
app.include_router(sessions.router)
app.include_router(calendar.router)
app.include_router(sync.router)
