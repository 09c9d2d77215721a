"""
Async engine for the participant record store.

Sessions are handed to SqlParticipantStore per request; nothing outside
services/records.py issues queries.
"""
from __future__ import annotations
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from snapquiz.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str, echo: bool = False) -> AsyncEngine:
    # pre-ping drops connections the database closed while idle
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def make_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False)


engine = make_engine(settings.database_url, echo=settings.db_echo)
SessionLocal = make_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session
