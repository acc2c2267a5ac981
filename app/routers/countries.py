from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_countries_provider
from app.schemas.country import CountryList, CountryOption
from app.services.errors import ReferenceDataUnavailable
from app.services.providers.rest_countries import RestCountriesProvider

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=CountryList)
async def list_countries(countries: RestCountriesProvider = Depends(get_countries_provider)):
    try:
        reference = await countries.get_all_countries()
    except ReferenceDataUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message) from exc
    options = [CountryOption(name=c.name.common, code=c.cca3) for c in reference]
    options.sort(key=lambda option: option.name.casefold())
    return CountryList(data=options)
