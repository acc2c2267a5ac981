from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_voting_service
from app.schemas.common import MessageResponse
from app.schemas.vote import RankedCountryList, RankedCountryRead, VoteCreate
from app.services.errors import DuplicateVote, InvalidCountry, ReferenceDataUnavailable, VoteFailed
from app.services.voting import RankedCountry, VotingService

router = APIRouter(prefix="/votes", tags=["votes"])


def _ranked_list(items: list[RankedCountry]) -> RankedCountryList:
    return RankedCountryList(data=[RankedCountryRead(**asdict(item)) for item in items])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_vote(payload: VoteCreate, service: VotingService = Depends(get_voting_service)):
    try:
        await service.submit_vote(payload.name, payload.email, payload.country)
    except DuplicateVote as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc
    except InvalidCountry as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except ReferenceDataUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message) from exc
    except VoteFailed as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message) from exc
    return MessageResponse(message="Vote submitted successfully")


@router.get("/top", response_model=RankedCountryList)
async def top_countries(service: VotingService = Depends(get_voting_service)):
    return _ranked_list(await service.get_top_countries())


@router.get("/search", response_model=RankedCountryList)
async def search_countries(q: str | None = None, service: VotingService = Depends(get_voting_service)):
    return _ranked_list(await service.search_countries(q))
