from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.logging import get_logger
from app.models.country import NOT_AVAILABLE, Country
from app.models.user import User
from app.repositories.country_repo import CountryRepository
from app.repositories.user_repo import UserRepository
from app.services.errors import DuplicateVote, InvalidCountry, VoteFailed, VotingError
from app.services.providers.rest_countries import RestCountriesProvider
from app.services.providers.types import ReferenceCountry

logger = get_logger()


@dataclass
class RankedCountry:
    country: str
    capital: str
    region: str
    sub_region: str
    votes: int
    rank: int


def rank_countries(countries: list[Country]) -> list[RankedCountry]:
    return [
        RankedCountry(
            country=country.name,
            capital=country.capital or NOT_AVAILABLE,
            region=country.region,
            sub_region=country.sub_region,
            votes=country.votes,
            rank=index + 1,
        )
        for index, country in enumerate(countries)
    ]


def country_from_reference(reference: ReferenceCountry) -> Country:
    return Country(
        code=reference.cca3,
        name=reference.name.common,
        capital=reference.capital[0] if reference.capital else NOT_AVAILABLE,
        region=reference.region,
        sub_region=reference.subregion or NOT_AVAILABLE,
        votes=0,
    )


class VotingService:
    def __init__(self, session: AsyncSession, countries: RestCountriesProvider) -> None:
        self.session = session
        self.countries = countries
        self.settings = get_settings()
        self.user_repo = UserRepository(session)
        self.country_repo = CountryRepository(session)

    async def submit_vote(self, name: str, email: str, country_code: str) -> None:
        try:
            if await self.user_repo.get_by_email(email):
                logger.info("vote_duplicate", email=email)
                raise DuplicateVote()
            # release the read transaction before a possible outbound fetch
            await self.session.commit()

            reference = await self.countries.get_country_by_code(country_code)
            if reference is None:
                raise InvalidCountry()

            country = await self.country_repo.get_by_code(country_code)
            if country is None:
                country = await self._create_country(reference)
            country_id = country.id

            await self._record_vote(name, email, country_id)
        except VotingError:
            raise
        except Exception as exc:
            logger.exception("vote_failed", email=email, country=country_code)
            raise VoteFailed() from exc

        logger.info("vote_submitted", email=email, country=country_code)

    async def _create_country(self, reference: ReferenceCountry) -> Country:
        try:
            country = await self.country_repo.create(country_from_reference(reference))
            await self.session.commit()
        except IntegrityError:
            # Another request created the same country first; use its row.
            await self.session.rollback()
            country = await self.country_repo.get_by_code(reference.cca3)
            if country is None:
                raise
            return country
        logger.info("country_created", code=country.code, name=country.name)
        return country

    async def _record_vote(self, name: str, email: str, country_id) -> None:
        try:
            await self.user_repo.create(User(name=name, email=email, country_id=country_id))
            await self.country_repo.increment_votes(country_id)
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if await self.user_repo.get_by_email(email):
                raise DuplicateVote() from exc
            raise
        except Exception:
            await self.session.rollback()
            raise

    async def get_top_countries(self) -> list[RankedCountry]:
        countries = await self.country_repo.list_top(self.settings.leaderboard_size)
        return rank_countries(countries)

    async def search_countries(self, query: str | None) -> list[RankedCountry]:
        if not query or not query.strip():
            return await self.get_top_countries()
        countries = await self.country_repo.search(query, self.settings.leaderboard_size)
        return rank_countries(countries)
