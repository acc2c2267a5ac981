import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
import app.models  # noqa: F401
from app.services.providers.rest_countries import RestCountriesProvider

REFERENCE_COUNTRIES = [
    {
        "name": {"common": "Argentina", "official": "Argentine Republic"},
        "cca3": "ARG",
        "capital": ["Buenos Aires"],
        "region": "Americas",
        "subregion": "South America",
    },
    {
        "name": {"common": "Brazil", "official": "Federative Republic of Brazil"},
        "cca3": "BRA",
        "capital": ["Brasília"],
        "region": "Americas",
        "subregion": "South America",
    },
    {
        "name": {"common": "France", "official": "French Republic"},
        "cca3": "FRA",
        "capital": ["Paris"],
        "region": "Europe",
        "subregion": "Western Europe",
    },
    {
        "name": {"common": "Japan", "official": "Japan"},
        "cca3": "JPN",
        "capital": ["Tokyo"],
        "region": "Asia",
        "subregion": "Eastern Asia",
    },
    {
        "name": {"common": "Antarctica", "official": "Antarctica"},
        "cca3": "ATA",
        "capital": [],
        "region": "Antarctic",
    },
]


class CountingHandler:
    def __init__(self, payload=None, status_code: int = 200) -> None:
        self.payload = REFERENCE_COUNTRIES if payload is None else payload
        self.status_code = status_code
        self.calls = 0
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def reference_handler():
    return CountingHandler()


@pytest.fixture
def countries_provider(reference_handler):
    return RestCountriesProvider(
        api_base="https://countries.test/v3.1",
        transport=httpx.MockTransport(reference_handler),
    )


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
