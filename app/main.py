"""Lesson Planner - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import ServerSelectionTimeoutError

from app.config import settings
from app.db import db_shutdown, db_startup
from app.api import academic_years, holidays, calendar, classes, subjects, teaching_groups, timetable, lessons, tasks, events, account
from app.api.deps import require_module_access

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await db_startup()
    except ServerSelectionTimeoutError as e:
        logger.error(
            "MongoDB is not reachable at %s. Start it with: docker compose up -d", settings.mongodb_url
        )
        raise RuntimeError("MongoDB connection failed.") from e
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="Academic calendar, timetable and lesson planning for teachers",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": errors}),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(account.router, prefix="/api/account", tags=["Account"], dependencies=[Depends(require_module_access("account"))])
app.include_router(academic_years.router, prefix="/api/academic-years", tags=["Academic Years"], dependencies=[Depends(require_module_access("academic_years"))])
app.include_router(holidays.router, prefix="/api/holidays", tags=["Holidays"], dependencies=[Depends(require_module_access("holidays"))])
app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"], dependencies=[Depends(require_module_access("calendar"))])
app.include_router(classes.router, prefix="/api/classes", tags=["Classes"], dependencies=[Depends(require_module_access("classes"))])
app.include_router(subjects.router, prefix="/api/subjects", tags=["Subjects"], dependencies=[Depends(require_module_access("subjects"))])
app.include_router(teaching_groups.router, prefix="/api/teaching-groups", tags=["Teaching Groups"], dependencies=[Depends(require_module_access("classes"))])
app.include_router(timetable.slots_router, prefix="/api/timetable-slots", tags=["Timetable"], dependencies=[Depends(require_module_access("timetable"))])
app.include_router(timetable.router, prefix="/api/timetable", tags=["Timetable"], dependencies=[Depends(require_module_access("timetable"))])
app.include_router(lessons.router, prefix="/api/lessons", tags=["Lessons"], dependencies=[Depends(require_module_access("lessons"))])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"], dependencies=[Depends(require_module_access("tasks"))])
app.include_router(events.router, prefix="/api/events", tags=["Events"], dependencies=[Depends(require_module_access("events"))])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
