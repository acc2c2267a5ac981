from __future__ import annotations

from pydantic import BaseModel, Field, TypeAdapter


class ReferenceCountryName(BaseModel):
    common: str
    official: str | None = None


class ReferenceCountry(BaseModel):
    """One record from the REST Countries `/all` listing."""

    name: ReferenceCountryName
    cca3: str
    capital: list[str] = Field(default_factory=list)
    region: str
    subregion: str | None = None


ReferenceCountryList = TypeAdapter(list[ReferenceCountry])
