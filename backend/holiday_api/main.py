"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from holiday_api.config import settings
from holiday_api.database import Base, engine
from holiday_api.errors import (
    LoadDataError,
    LocationValidationError,
    PictureStorageError,
    ResourceNotFoundError,
)

# Import routers
from holiday_api.routers import participants, holidays, invitations, activities, statistics

# Import all models so Base.metadata knows about them
from holiday_api.models.location import Location        # noqa: F401
from holiday_api.models.participant import Participant  # noqa: F401
from holiday_api.models.holiday import Holiday          # noqa: F401
from holiday_api.models.activity import Activity        # noqa: F401
from holiday_api.models.invitation import Invitation    # noqa: F401
from holiday_api.models.participate import Participate  # noqa: F401
from holiday_api.models.message import Message          # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Holiday Planner",
    description="Group holiday planning: holidays, invitations, activities and chat",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(participants.router, prefix="/api/participants", tags=["Participants"])
app.include_router(holidays.router, prefix="/api/holidays", tags=["Holidays"])
app.include_router(invitations.router, prefix="/api/invitations", tags=["Invitations"])
app.include_router(activities.router, prefix="/api/activities", tags=["Activities"])
app.include_router(statistics.router, prefix="/api/statistics", tags=["Statistics"])


@app.exception_handler(ResourceNotFoundError)
def not_found_handler(request: Request, exc: ResourceNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(LoadDataError)
def load_data_handler(request: Request, exc: LoadDataError):
    logger.error("Read failed on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(LocationValidationError)
def location_handler(request: Request, exc: LocationValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(PictureStorageError)
def picture_handler(request: Request, exc: PictureStorageError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
