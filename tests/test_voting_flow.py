import pytest

from app.models.user import User
from app.repositories.country_repo import CountryRepository
from app.repositories.user_repo import UserRepository
from app.services.errors import DuplicateVote, InvalidCountry
from app.services.voting import VotingService
from sqlalchemy import select


@pytest.mark.asyncio
async def test_leaderboard_scenario(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)

    await service.submit_vote("A", "a@x.com", "ARG")
    await service.submit_vote("B", "b@x.com", "ARG")
    await service.submit_vote("C", "c@x.com", "BRA")

    top = await service.get_top_countries()
    assert [(r.country, r.capital, r.votes, r.rank) for r in top] == [
        ("Argentina", "Buenos Aires", 2, 1),
        ("Brazil", "Brasília", 1, 2),
    ]
    assert await service.search_countries("  ") == top
    assert await UserRepository(db_session).count() == 3
    assert await CountryRepository(db_session).count() == 2


@pytest.mark.asyncio
async def test_duplicate_resubmission_leaves_tallies_unchanged(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)
    await service.submit_vote("A", "a@x.com", "ARG")
    await service.submit_vote("C", "c@x.com", "BRA")

    with pytest.raises(DuplicateVote):
        await service.submit_vote("X", "a@x.com", "BRA")

    db_session.expire_all()
    repo = CountryRepository(db_session)
    assert (await repo.get_by_code("BRA")).votes == 1
    assert (await repo.get_by_code("ARG")).votes == 1
    assert await UserRepository(db_session).count() == 2


@pytest.mark.asyncio
async def test_invalid_country_writes_nothing(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)

    with pytest.raises(InvalidCountry):
        await service.submit_vote("A", "a@x.com", "XYZ")

    assert await CountryRepository(db_session).count() == 0
    assert await UserRepository(db_session).count() == 0


@pytest.mark.asyncio
async def test_tally_matches_vote_rows(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)
    for index, code in enumerate(["FRA", "JPN", "FRA", "ATA", "FRA", "JPN"]):
        await service.submit_vote(f"Voter {index}", f"v{index}@x.com", code)

    db_session.expire_all()
    repo = CountryRepository(db_session)
    for code in ("FRA", "JPN", "ATA"):
        country = await repo.get_by_code(code)
        result = await db_session.execute(select(User).where(User.country_id == country.id))
        assert country.votes == len(result.scalars().all())

    antarctica = await repo.get_by_code("ATA")
    assert antarctica.capital == "N/A"
    assert antarctica.sub_region == "N/A"


@pytest.mark.asyncio
async def test_search_over_persisted_votes(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)
    await service.submit_vote("A", "a@x.com", "JPN")
    await service.submit_vote("B", "b@x.com", "FRA")
    await service.submit_vote("C", "c@x.com", "FRA")

    results = await service.search_countries("asia")

    assert [(r.country, r.sub_region, r.rank) for r in results] == [("Japan", "Eastern Asia", 1)]


@pytest.mark.asyncio
async def test_no_open_transaction_during_country_lookup(db_session, countries_provider):
    service = VotingService(db_session, countries_provider)
    open_during_lookup = []
    lookup = countries_provider.get_country_by_code

    async def recording_lookup(code):
        open_during_lookup.append(db_session.in_transaction())
        return await lookup(code)

    countries_provider.get_country_by_code = recording_lookup

    await service.submit_vote("A", "a@x.com", "FRA")

    assert open_during_lookup == [False]
    assert (await CountryRepository(db_session).get_by_code("FRA")).votes == 1
