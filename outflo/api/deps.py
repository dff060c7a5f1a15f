"""
API dependencies - shared across all routes.
"""
from typing import AsyncIterator

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from outflo.context import AppContext
from outflo.services.message_service import MessageGenerator


def get_context(request: Request) -> AppContext:
    """The context built by create_app()."""
    return request.app.state.context


async def get_session(context: AppContext = Depends(get_context)) -> AsyncIterator[AsyncSession]:
    async with context.session_factory() as session:
        yield session


def get_message_generator(context: AppContext = Depends(get_context)) -> MessageGenerator:
    return context.message_generator
