from __future__ import annotations

import asyncio
from collections.abc import Iterable

import httpx

from app.core.config import get_settings
from app.core.logging import get_logger
from app.services.errors import ReferenceDataUnavailable
from app.services.providers.http_client import get_json
from app.services.providers.types import ReferenceCountry, ReferenceCountryList

FIELDS = "name,cca3,capital,region,subregion"

logger = get_logger()


class RestCountriesProvider:
    """Reference country data from REST Countries, fetched once per instance.

    The first successful fetch is kept for the lifetime of the provider. A failed
    fetch leaves the cache empty so the next caller goes back to the network.
    Concurrent first callers share a single in-flight request.
    """

    def __init__(
        self,
        api_base: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_base = (api_base or settings.rest_countries_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.reference_timeout_seconds
        self.transport = transport
        self._cache: list[ReferenceCountry] | None = None
        self._lock = asyncio.Lock()

    async def get_all_countries(self) -> list[ReferenceCountry]:
        if self._cache is not None:
            logger.debug("countries_cache_hit", count=len(self._cache))
            return self._cache

        async with self._lock:
            if self._cache is not None:
                return self._cache
            self._cache = await self._fetch()
            return self._cache

    async def get_country_by_code(self, code: str) -> ReferenceCountry | None:
        countries = await self.get_all_countries()
        country = next((c for c in countries if c.cca3 == code), None)
        if country is None:
            logger.warning("country_not_found", code=code)
        else:
            logger.info("country_found", code=code, name=country.name.common)
        return country

    async def get_countries_by_codes(self, codes: Iterable[str]) -> dict[str, ReferenceCountry]:
        wanted = set(codes)
        countries = await self.get_all_countries()
        found = {c.cca3: c for c in countries if c.cca3 in wanted}
        logger.info("countries_lookup", requested=len(wanted), found=len(found))
        return found

    async def _fetch(self) -> list[ReferenceCountry]:
        url = f"{self.api_base}/all"
        logger.info("countries_fetch", url=url)
        try:
            payload = await get_json(
                url,
                params={"fields": FIELDS},
                timeout=self.timeout,
                transport=self.transport,
            )
            countries = ReferenceCountryList.validate_python(payload)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("countries_fetch_failed", url=url, error=str(exc))
            raise ReferenceDataUnavailable("Failed to fetch countries") from exc
        logger.info("countries_fetched", count=len(countries))
        return countries
