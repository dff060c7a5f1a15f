"""
Application context - everything a request handler needs, built once at startup.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from outflo.config import Settings
from outflo.database import create_engine, create_session_factory
from outflo.services.message_service import MessageGenerator


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker
    message_generator: Optional[MessageGenerator] = None

    @classmethod
    def build(
        cls,
        settings: Settings,
        message_generator: Optional[MessageGenerator] = None,
        with_generator: bool = True
    ) -> "AppContext":
        engine = create_engine(settings.DATABASE_URL, echo=settings.DEV_MODE)
        if message_generator is None and with_generator:
            message_generator = MessageGenerator(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=create_session_factory(engine),
            message_generator=message_generator,
        )

    async def dispose(self):
        await self.engine.dispose()
