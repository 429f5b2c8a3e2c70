from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from duty_roster.core.config import get_settings

settings = get_settings()
# SQL echo follows the application log level so DEBUG runs show plan and run queries.
engine = create_async_engine(settings.database_url, future=True, echo=settings.log_level.upper() == "DEBUG")
async_session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        yield session
