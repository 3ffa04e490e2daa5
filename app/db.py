"""MongoDB connection and Beanie document registration."""
from contextlib import asynccontextmanager

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.models import (
    User,
    AcademicYear,
    Holiday,
    SchoolClass,
    Subject,
    TimetableSlot,
    TimetableEntry,
    Lesson,
    Task,
    Event,
)


_client = None


async def db_startup():
    """Connect to MongoDB and initialize Beanie ODM."""
    global _client
    _client = AsyncIOMotorClient(settings.mongodb_url)
    await init_beanie(
        database=_client[settings.mongodb_db_name],
        document_models=[
            User,
            AcademicYear,
            Holiday,
            SchoolClass,
            Subject,
            TimetableSlot,
            TimetableEntry,
            Lesson,
            Task,
            Event,
        ],
    )


async def db_shutdown():
    """Close MongoDB connection."""
    global _client
    if _client:
        _client.close()
        _client = None


@asynccontextmanager
async def transaction():
    """Yield a session whose writes commit together or not at all."""
    if _client is None:
        raise RuntimeError("Database is not initialised")
    async with await _client.start_session() as session:
        async with session.start_transaction():
            yield session
