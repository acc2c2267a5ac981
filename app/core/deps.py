from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_session
from app.services.providers.rest_countries import RestCountriesProvider
from app.services.voting import VotingService


async def get_db_session() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


def get_countries_provider(request: Request) -> RestCountriesProvider:
    return request.app.state.countries_provider


def get_voting_service(
    session: AsyncSession = Depends(get_db_session),
    countries: RestCountriesProvider = Depends(get_countries_provider),
) -> VotingService:
    return VotingService(session, countries)
