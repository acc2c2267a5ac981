from __future__ import annotations

import argparse
import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import configure_logging, get_logger
from app.db.session import SessionLocal, engine
from app.models.user import User
from app.repositories.country_repo import CountryRepository
from app.repositories.user_repo import UserRepository
from app.services.providers.rest_countries import RestCountriesProvider
from app.services.voting import country_from_reference

logger = get_logger()

SEED_COUNTRY_CODES = [
    "ARG", "BRA", "USA", "CAN", "MEX", "FRA", "DEU", "ESP",
    "ITA", "GBR", "JPN", "AUS", "IND", "CHN", "ZAF",
]

SEED_VOTERS = [
    ("Alice Johnson", "alice@example.com", "ARG"),
    ("Bob Smith", "bob@example.com", "ARG"),
    ("Charlie Brown", "charlie@example.com", "ARG"),
    ("Diana Prince", "diana@example.com", "BRA"),
    ("Ethan Hunt", "ethan@example.com", "BRA"),
    ("Fiona Green", "fiona@example.com", "BRA"),
    ("George Wilson", "george@example.com", "BRA"),
    ("Hannah Lee", "hannah@example.com", "USA"),
    ("Isaac Newton", "isaac@example.com", "USA"),
    ("Julia Roberts", "julia@example.com", "USA"),
    ("Kevin Hart", "kevin@example.com", "USA"),
    ("Laura Palmer", "laura@example.com", "USA"),
    ("Michael Scott", "michael@example.com", "CAN"),
    ("Nina Simone", "nina@example.com", "CAN"),
    ("Oscar Wilde", "oscar@example.com", "CAN"),
    ("Patricia Hill", "patricia@example.com", "MEX"),
    ("Quinn Fabray", "quinn@example.com", "MEX"),
    ("Rachel Green", "rachel@example.com", "FRA"),
    ("Steve Rogers", "steve@example.com", "FRA"),
    ("Tina Fey", "tina@example.com", "FRA"),
    ("Uma Thurman", "uma@example.com", "DEU"),
    ("Victor Hugo", "victor@example.com", "DEU"),
    ("Wendy Adams", "wendy@example.com", "ESP"),
    ("Xavier Charles", "xavier@example.com", "ESP"),
    ("Yolanda King", "yolanda@example.com", "ITA"),
    ("Zoe Barnes", "zoe@example.com", "ITA"),
    ("Andrew Taylor", "andrew@example.com", "GBR"),
    ("Bella Swan", "bella@example.com", "GBR"),
    ("Carlos Sainz", "carlos@example.com", "JPN"),
    ("Daisy Johnson", "daisy@example.com", "JPN"),
    ("Edward Cullen", "edward@example.com", "AUS"),
    ("Felicity Smoak", "felicity@example.com", "AUS"),
    ("Gary Cooper", "gary@example.com", "IND"),
    ("Holly Woods", "holly@example.com", "IND"),
    ("Ivan Drago", "ivan@example.com", "CHN"),
    ("Jessica Jones", "jessica@example.com", "ZAF"),
]


async def seed_database(
    session: AsyncSession,
    provider: RestCountriesProvider,
    clear: bool = True,
) -> dict[str, int]:
    country_repo = CountryRepository(session)
    user_repo = UserRepository(session)

    if clear:
        await user_repo.delete_all()
        await country_repo.delete_all()
        await session.commit()
        logger.info("seed_cleared")

    reference = await provider.get_countries_by_codes(SEED_COUNTRY_CODES)
    country_ids = {}
    for code in SEED_COUNTRY_CODES:
        if code not in reference:
            logger.warning("seed_country_missing", code=code)
            continue
        country = await country_repo.get_by_code(code)
        if country is None:
            country = await country_repo.create(country_from_reference(reference[code]))
            logger.info("seed_country_created", code=code, name=country.name)
        country_ids[code] = country.id
    await session.commit()

    created_users = 0
    for name, email, code in SEED_VOTERS:
        if code not in country_ids or await user_repo.get_by_email(email):
            continue
        await user_repo.create(User(name=name, email=email, country_id=country_ids[code]))
        await country_repo.increment_votes(country_ids[code])
        await session.commit()
        created_users += 1
        logger.info("seed_vote_created", name=name, country=code)

    stats = {
        "total_countries": await country_repo.count(),
        "countries_with_votes": await country_repo.count(with_votes=True),
        "total_users": await user_repo.count(),
        "created_users": created_users,
    }
    logger.info("seed_complete", **stats)
    return stats


async def _run(clear: bool) -> None:
    provider = RestCountriesProvider()
    try:
        async with SessionLocal() as session:
            await seed_database(session, provider, clear=clear)
    finally:
        await engine.dispose()


def main() -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Seed the database with demo countries and votes")
    parser.add_argument("--no-clear", action="store_true", help="keep existing users and countries")
    args = parser.parse_args()

    asyncio.run(_run(clear=not args.no_clear))


if __name__ == "__main__":
    main()
