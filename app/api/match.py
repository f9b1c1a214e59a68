from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.schemas.common import APIResponse
from app.schemas.match import (
    MatchHand,
    MatchScore,
    MatchSummary,
    PlayRoundRequest,
    RoundResponse,
    StartMatchRequest,
    StartMatchResponse,
)
from app.services.match import MatchService

router = APIRouter(prefix="/matches", tags=["matches"])

Username = Annotated[str, Path(min_length=1, max_length=100)]


@router.post("/{username}")
async def start_match(
    username: Username, request: StartMatchRequest, service: Annotated[MatchService, Depends()]
) -> APIResponse[StartMatchResponse]:
    result = await service.start_match(username, request)
    return APIResponse(data=result, message="Match started")


@router.get("/{username}/hand")
async def get_hand(
    username: Username, service: Annotated[MatchService, Depends()]
) -> APIResponse[MatchHand]:
    return APIResponse(data=await service.get_hand(username))


@router.post("/{username}/rounds")
async def play_round(
    username: Username, request: PlayRoundRequest, service: Annotated[MatchService, Depends()]
) -> APIResponse[RoundResponse]:
    return APIResponse(data=await service.play_round(username, request.index))


@router.get("/{username}/score")
async def get_score(
    username: Username, service: Annotated[MatchService, Depends()]
) -> APIResponse[MatchScore]:
    return APIResponse(data=await service.get_score(username))


@router.get("/{username}/outcome")
async def get_outcome(
    username: Username, service: Annotated[MatchService, Depends()]
) -> APIResponse[MatchSummary]:
    return APIResponse(data=await service.get_outcome(username))
