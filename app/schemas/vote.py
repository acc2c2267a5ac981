from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.common import BaseSchema


class VoteCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    country: str = Field(min_length=3, max_length=3, description="ISO 3166-1 alpha-3 code")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"name": "John Doe", "email": "john.doe@example.com", "country": "USA"}]}
    )


class RankedCountryRead(BaseSchema):
    country: str
    capital: str
    region: str
    sub_region: str = Field(alias="subRegion")
    votes: int
    rank: int


class RankedCountryList(BaseModel):
    data: list[RankedCountryRead]
