from __future__ import annotations

from pydantic import BaseModel


class CountryOption(BaseModel):
    name: str
    code: str


class CountryList(BaseModel):
    data: list[CountryOption]
