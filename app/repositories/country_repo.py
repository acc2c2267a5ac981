from __future__ import annotations

import uuid
from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.country import Country


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CountryRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _ranked(self) -> Select[tuple[Country]]:
        return select(Country).where(Country.votes > 0).order_by(Country.votes.desc(), Country.name)

    async def get_by_code(self, code: str) -> Country | None:
        result = await self.session.execute(select(Country).where(Country.code == code))
        return result.scalar_one_or_none()

    async def create(self, country: Country) -> Country:
        self.session.add(country)
        await self.session.flush()
        await self.session.refresh(country)
        return country

    async def increment_votes(self, country_id: uuid.UUID) -> None:
        await self.session.execute(
            update(Country)
            .where(Country.id == country_id)
            .values(votes=Country.votes + 1)
        )

    async def list_top(self, limit: int) -> list[Country]:
        result = await self.session.execute(self._ranked().limit(limit))
        return list(result.scalars().all())

    async def search(self, query: str, limit: int) -> list[Country]:
        pattern = _like_pattern(query)
        stmt = (
            self._ranked()
            .where(
                or_(
                    Country.name.ilike(pattern, escape="\\"),
                    Country.capital.ilike(pattern, escape="\\"),
                    Country.region.ilike(pattern, escape="\\"),
                    Country.sub_region.ilike(pattern, escape="\\"),
                )
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, with_votes: bool = False) -> int:
        stmt = select(func.count()).select_from(Country)
        if with_votes:
            stmt = stmt.where(Country.votes > 0)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def delete_all(self) -> None:
        await self.session.execute(delete(Country))
