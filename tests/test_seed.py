import pytest

from app.repositories.country_repo import CountryRepository
from app.repositories.user_repo import UserRepository
from app.seed import seed_database
from app.services.voting import VotingService


@pytest.mark.asyncio
async def test_seed_creates_known_countries_and_votes(db_session, countries_provider):
    stats = await seed_database(db_session, countries_provider)

    # ARG, BRA, FRA and JPN of the seed list exist in the test reference data
    assert stats["total_countries"] == 4
    assert stats["countries_with_votes"] == 4
    assert stats["created_users"] == 12
    assert stats["total_users"] == 12

    top = await VotingService(db_session, countries_provider).get_top_countries()
    assert [(r.country, r.votes) for r in top] == [
        ("Brazil", 4),
        ("Argentina", 3),
        ("France", 3),
        ("Japan", 2),
    ]


@pytest.mark.asyncio
async def test_seed_clears_existing_votes(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)
    await service.submit_vote("Someone", "someone@x.com", "JPN")
    await service.submit_vote("Someone Else", "else@x.com", "ATA")

    await seed_database(db_session, countries_provider)

    db_session.expire_all()
    repo = CountryRepository(db_session)
    assert await UserRepository(db_session).get_by_email("someone@x.com") is None
    assert await UserRepository(db_session).get_by_email("else@x.com") is None
    assert await repo.get_by_code("ATA") is None
    assert (await repo.get_by_code("JPN")).votes == 2


@pytest.mark.asyncio
async def test_seed_without_clear_is_idempotent(db_session, countries_provider):
    await seed_database(db_session, countries_provider)
    stats = await seed_database(db_session, countries_provider, clear=False)

    assert stats["created_users"] == 0
    assert stats["total_users"] == 12
